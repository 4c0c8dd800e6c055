"""Utility helpers for URL rewriting and path handling."""

from __future__ import annotations

from pathlib import Path

LOW_RES_SIZE = "200,200"
HIGH_RES_SIZE = "1600,1600"


def upgrade_image_url(url: str) -> str:
    """Ask the image server for the 1600px rendition instead of the 200px one."""
    return url.replace(LOW_RES_SIZE, HIGH_RES_SIZE, 1)


def destination_for(images_dir: Path, object_id: int) -> Path:
    return Path(images_dir) / f"{object_id}.jpg"


def file_exists(path: Path) -> bool:
    return Path(path).is_file()


def ensure_dir(path: Path) -> Path:
    """Create the directory and any missing parents; existing is fine."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path

"""Configuration objects and constants for the image downloader."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_IMAGES_DIR = Path("data/downloaded")
DEFAULT_OPENDATA_DIR = Path("../opendata")
DEFAULT_THREADS = 20
DEFAULT_TIMEOUT = 60.0

OBJECTS_CSV = Path("data/objects.csv")
PUBLISHED_IMAGES_CSV = Path("data/published_images.csv")


@dataclass
class DownloadConfig:
    """Top-level settings that control where images come from and go to."""

    images_dir: Path = DEFAULT_IMAGES_DIR
    threads: int = DEFAULT_THREADS
    opendata_dir: Path = DEFAULT_OPENDATA_DIR
    timeout: Optional[float] = DEFAULT_TIMEOUT
    count_failures_as_downloaded: bool = False

    @property
    def objects_csv(self) -> Path:
        return Path(self.opendata_dir) / OBJECTS_CSV

    @property
    def published_images_csv(self) -> Path:
        return Path(self.opendata_dir) / PUBLISHED_IMAGES_CSV

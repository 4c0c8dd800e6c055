"""Data models used throughout the download pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .utils import destination_for


@dataclass
class Painting:
    """A painting record from the objects table, joined with its image URI."""

    id: int
    title: str
    artist: str
    main_uri: str = ""


@dataclass(frozen=True)
class WorkItem:
    """One unit of download work handed to the worker pool."""

    id: int
    url: str
    destination: Path
    title: str = ""
    artist: str = ""

    @classmethod
    def from_painting(cls, painting: Painting, images_dir: Path) -> "WorkItem":
        return cls(
            id=painting.id,
            url=painting.main_uri,
            destination=destination_for(images_dir, painting.id),
            title=painting.title,
            artist=painting.artist,
        )

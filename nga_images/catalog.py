"""Read the open data CSV tables and join paintings with their image URIs."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Sequence, Tuple

from .config import DownloadConfig
from .errors import ParseError
from .models import Painting, WorkItem

logger = logging.getLogger("nga_images")

PAINTING_CLASSIFICATION = "Painting"

# objects.csv
OBJECT_ID_COL = 0
OBJECT_TITLE_COL = 4
OBJECT_ARTIST_COL = 14
OBJECT_CLASSIFICATION_COL = 17

# published_images.csv
IMAGE_URI_COL = 2
IMAGE_OBJECT_ID_COL = 10


def _read_rows(path: Path) -> Iterator[Tuple[int, Sequence[str]]]:
    """Yield ``(line_number, row)`` pairs after the header row."""
    try:
        with Path(path).open(encoding="utf-8", newline="") as handle:
            reader = csv.reader(handle)
            next(reader, None)
            for row in reader:
                yield reader.line_num, row
    except OSError as exc:
        raise ParseError(f"Cannot read {path}: {exc}") from exc
    except (csv.Error, UnicodeDecodeError) as exc:
        raise ParseError(f"Malformed CSV in {path}: {exc}") from exc


def _field(path: Path, line: int, row: Sequence[str], column: int) -> str:
    try:
        return row[column]
    except IndexError:
        raise ParseError(
            f"{path}:{line}: expected at least {column + 1} columns, got {len(row)}"
        ) from None


def _int_field(path: Path, line: int, row: Sequence[str], column: int) -> int:
    value = _field(path, line, row, column)
    try:
        return int(value)
    except ValueError:
        raise ParseError(f"{path}:{line}: invalid id {value!r}") from None


def find_paintings(objects_csv: Path) -> List[Painting]:
    """Return every object classified as a painting."""
    paintings: List[Painting] = []
    for line, row in _read_rows(objects_csv):
        classification = _field(objects_csv, line, row, OBJECT_CLASSIFICATION_COL)
        if classification != PAINTING_CLASSIFICATION:
            continue
        paintings.append(
            Painting(
                id=_int_field(objects_csv, line, row, OBJECT_ID_COL),
                title=_field(objects_csv, line, row, OBJECT_TITLE_COL),
                artist=_field(objects_csv, line, row, OBJECT_ARTIST_COL),
            )
        )
    return paintings


def add_uris(paintings: List[Painting], published_images_csv: Path) -> None:
    """Attach the published image URI to each painting that has one."""
    by_id: Dict[int, Painting] = {painting.id: painting for painting in paintings}
    for line, row in _read_rows(published_images_csv):
        object_id = _int_field(published_images_csv, line, row, IMAGE_OBJECT_ID_COL)
        painting = by_id.get(object_id)
        if painting is not None:
            painting.main_uri = _field(published_images_csv, line, row, IMAGE_URI_COL)


def load_paintings(config: DownloadConfig) -> List[Painting]:
    paintings = find_paintings(config.objects_csv)
    add_uris(paintings, config.published_images_csv)
    return paintings


def build_work_items(paintings: List[Painting], images_dir: Path) -> List[WorkItem]:
    return [WorkItem.from_painting(painting, images_dir) for painting in paintings]

import csv
import threading
from pathlib import Path

import pytest


def write_objects_csv(path: Path, rows):
    """rows: iterable of (id, title, artist, classification)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow([f"col{i}" for i in range(18)])
        for object_id, title, artist, classification in rows:
            row = [""] * 18
            row[0] = str(object_id)
            row[4] = title
            row[14] = artist
            row[17] = classification
            writer.writerow(row)


def write_published_images_csv(path: Path, rows):
    """rows: iterable of (id, uri)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow([f"col{i}" for i in range(11)])
        for object_id, uri in rows:
            row = [""] * 11
            row[2] = uri
            row[10] = str(object_id)
            writer.writerow(row)


class FakeFetcher:
    """Writes a small body for every URL unless told to fail it."""

    def __init__(self, failures=None, body=b"\xff\xd8jpeg"):
        self.failures = failures or {}
        self.body = body
        self.calls = []
        self._lock = threading.Lock()

    def fetch(self, url, destination):
        with self._lock:
            self.calls.append((url, Path(destination)))
        exc = self.failures.get(url)
        if exc is not None:
            raise exc
        Path(destination).write_bytes(self.body)

    def close(self):
        pass


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def opendata_dir(tmp_path):
    base = tmp_path / "opendata"
    write_objects_csv(
        base / "data" / "objects.csv",
        [
            (1, "Sunset", "Turner", "Painting"),
            (2, "Harbor", "Monet", "Painting"),
            (3, "Vase", "Unknown", "Decorative Art"),
            (4, "Portrait", "Sargent", "Painting"),
        ],
    )
    write_published_images_csv(
        base / "data" / "published_images.csv",
        [
            (2, "https://api.nga.gov/iiif/abc/full/!200,200/0/default.jpg"),
            (3, "https://api.nga.gov/iiif/vase/full/!200,200/0/default.jpg"),
            (4, "https://api.nga.gov/iiif/def/full/!200,200/0/default.jpg"),
            (999, "https://api.nga.gov/iiif/orphan/full/!200,200/0/default.jpg"),
        ],
    )
    return base

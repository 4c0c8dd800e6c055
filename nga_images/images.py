"""Image downloading utilities."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import requests
from requests.adapters import HTTPAdapter

from .errors import FileSystemError, HTTPStatusError, NetworkError

logger = logging.getLogger("nga_images")

CHUNK_SIZE = 64 * 1024
PARTIAL_SUFFIX = ".part"


def partial_path(destination: Path) -> Path:
    destination = Path(destination)
    return destination.with_name(destination.name + PARTIAL_SUFFIX)


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Failed to remove partial file %s: %s", path, exc)


class ImageFetcher:
    """Fetch single images over HTTP and stream them to disk.

    One session is shared by every worker thread; its connection pool is
    sized to the number of workers so none of them wait on a free socket.
    The body is written to ``<destination>.part`` and only renamed onto the
    destination once it is complete, so an interrupted download never looks
    like a finished one.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        pool_size: int = 10,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        self.session = session

    def fetch(self, url: str, destination: Path) -> None:
        """Download ``url`` into ``destination``.

        Raises NetworkError, HTTPStatusError or FileSystemError. On any of
        them nothing is left at ``destination`` or its partial path.
        """
        destination = Path(destination)
        tmp_path = partial_path(destination)
        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as resp:
                if resp.status_code != 200:
                    raise HTTPStatusError(url, resp.status_code)
                self._write_body(resp, tmp_path)
            os.replace(tmp_path, destination)
        except requests.RequestException as exc:
            _discard(tmp_path)
            raise NetworkError(url, str(exc)) from exc
        except OSError as exc:
            _discard(tmp_path)
            raise FileSystemError(url, f"cannot write {destination}: {exc}") from exc
        except BaseException:
            _discard(tmp_path)
            raise

    @staticmethod
    def _write_body(resp: requests.Response, tmp_path: Path) -> None:
        with tmp_path.open("wb") as handle:
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    handle.write(chunk)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "ImageFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

"""Exception types raised while loading the catalog and fetching images."""

from __future__ import annotations

from typing import Optional


class NGAImagesError(Exception):
    """Base class for all errors raised by this package."""


class ParseError(NGAImagesError):
    """Input CSV could not be read or a row is malformed. Fatal for the run."""


class FetchError(NGAImagesError):
    """A single image could not be fetched. Counted, never fatal."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{message} ({url})")
        self.url = url


class NetworkError(FetchError):
    """The HTTP request could not be completed."""


class HTTPStatusError(FetchError):
    """The server answered with something other than 200."""

    def __init__(self, url: str, status_code: Optional[int]) -> None:
        super().__init__(url, f"received non 200 response code {status_code}")
        self.status_code = status_code


class FileSystemError(FetchError):
    """The destination file could not be created or written."""

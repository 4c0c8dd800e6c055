"""Command-line entry point for the painting image downloader."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Sequence

from .config import (
    DEFAULT_IMAGES_DIR,
    DEFAULT_OPENDATA_DIR,
    DEFAULT_THREADS,
    DEFAULT_TIMEOUT,
    DownloadConfig,
)
from .errors import ParseError
from .pipeline import download_paintings

logger = logging.getLogger("nga_images.cli")


def _timeout(value: str) -> Optional[float]:
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid timeout: {value!r}") from None
    if seconds < 0:
        raise argparse.ArgumentTypeError(f"timeout must not be negative: {value}")
    return seconds or None


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Download painting images listed in the National Gallery of Art open data set."
        ),
    )
    parser.add_argument(
        "--images_dir",
        "--images-dir",
        dest="images_dir",
        default=DEFAULT_IMAGES_DIR,
        type=Path,
        help="images output directory",
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=DEFAULT_THREADS,
        help="number of download threads",
    )
    parser.add_argument(
        "--opendata_dir",
        "--opendata-dir",
        dest="opendata_dir",
        default=DEFAULT_OPENDATA_DIR,
        type=Path,
        help="path to the https://github.com/NationalGalleryOfArt/opendata base dir",
    )
    parser.add_argument(
        "--timeout",
        type=_timeout,
        default=DEFAULT_TIMEOUT,
        help="Per-request timeout in seconds; 0 waits forever",
    )
    parser.add_argument(
        "--count-failures-as-downloaded",
        action="store_true",
        help="Also count failed fetches under 'downloaded', as older releases did",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args(argv)
    if args.threads < 1:
        parser.error("--threads must be at least 1")
    return args


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = DownloadConfig(
        images_dir=args.images_dir,
        threads=args.threads,
        opendata_dir=args.opendata_dir,
        timeout=args.timeout,
        count_failures_as_downloaded=args.count_failures_as_downloaded,
    )

    overall_start = time.perf_counter()
    try:
        stats = download_paintings(config)
    except ParseError as exc:
        logger.error("Cannot load the catalog: %s", exc)
        return 1
    total_elapsed = time.perf_counter() - overall_start

    logger.info(
        "Finished in %.2fs (%d downloaded, %d errored, %d already existed, %d without URI)",
        total_elapsed,
        stats.downloaded,
        stats.errored,
        stats.already_existed,
        stats.no_uri,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""MCP server exposing the painting image download as a tool."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

from mcp.server.fastmcp import FastMCP

from .config import DEFAULT_IMAGES_DIR, DEFAULT_OPENDATA_DIR, DEFAULT_THREADS, DownloadConfig
from .pipeline import download_paintings

logger = logging.getLogger("nga_images.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="nga-images")


@mcp.tool()
def download(
    images_dir: str = str(DEFAULT_IMAGES_DIR),
    opendata_dir: str = str(DEFAULT_OPENDATA_DIR),
    threads: int = DEFAULT_THREADS,
) -> Dict[str, int]:
    """Download every painting image from the open data set and return the tallies."""

    source = Path(opendata_dir).expanduser()
    if not source.is_dir():
        raise FileNotFoundError(f"Open data directory does not exist: {source}")

    config = DownloadConfig(
        images_dir=Path(images_dir).expanduser(),
        threads=threads,
        opendata_dir=source,
    )
    stats = download_paintings(config)
    return stats.as_dict()


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()

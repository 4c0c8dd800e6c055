"""Concurrent orchestration: feed work items to a pool of download workers."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from queue import Queue
from typing import Dict, Iterable, List, Optional, Protocol

from .catalog import build_work_items, load_paintings
from .config import DownloadConfig
from .errors import FetchError
from .images import ImageFetcher
from .models import WorkItem
from .utils import ensure_dir, file_exists, upgrade_image_url

logger = logging.getLogger("nga_images")

ALREADY_EXISTED = "already_existed"
ERRORED = "errored"
NO_URI = "no_uri"
DOWNLOADED = "downloaded"

# Placed on the queue once per worker after the last item.
_END_OF_WORK = None


class Fetcher(Protocol):
    def fetch(self, url: str, destination: Path) -> None:
        ...


@dataclass
class DownloadStats:
    """Outcome counters shared by the workers of one pipeline run."""

    already_existed: int = 0
    errored: int = 0
    no_uri: int = 0
    downloaded: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def increment(self, counter: str) -> None:
        with self._lock:
            setattr(self, counter, getattr(self, counter) + 1)

    @property
    def total(self) -> int:
        return self.already_existed + self.errored + self.no_uri + self.downloaded

    def as_dict(self) -> Dict[str, int]:
        return {
            ALREADY_EXISTED: self.already_existed,
            ERRORED: self.errored,
            NO_URI: self.no_uri,
            DOWNLOADED: self.downloaded,
        }


class Dispatcher(threading.Thread):
    """Push work items onto the queue, then one end marker per worker."""

    def __init__(self, items: Iterable[WorkItem], work_queue: Queue, workers: int):
        super().__init__(name="dispatcher", daemon=True)
        self.items = items
        self.work_queue = work_queue
        self.workers = workers
        self.error: Optional[Exception] = None

    def run(self) -> None:
        try:
            for item in self.items:
                self.work_queue.put(item)
        except Exception as exc:  # pylint: disable=broad-except
            self.error = exc
        finally:
            for _ in range(self.workers):
                self.work_queue.put(_END_OF_WORK)


class WorkerPool:
    """A fixed number of threads draining one queue of work items."""

    def __init__(
        self,
        threads: int,
        work_queue: Queue,
        fetcher: Fetcher,
        stats: DownloadStats,
        count_failures_as_downloaded: bool = False,
    ) -> None:
        if threads < 1:
            raise ValueError(f"threads must be at least 1, got {threads}")
        self.threads = threads
        self.work_queue = work_queue
        self.fetcher = fetcher
        self.stats = stats
        self.count_failures_as_downloaded = count_failures_as_downloaded
        self._workers: List[threading.Thread] = []

    def start(self) -> None:
        for index in range(self.threads):
            worker = threading.Thread(
                target=self._drain, name=f"download-worker-{index}", daemon=True
            )
            worker.start()
            self._workers.append(worker)

    def join(self) -> None:
        for worker in self._workers:
            worker.join()

    def _drain(self) -> None:
        while True:
            item = self.work_queue.get()
            if item is _END_OF_WORK:
                return
            try:
                self.process(item)
            except Exception:  # pylint: disable=broad-except
                logger.exception("Unexpected error processing painting %d", item.id)
                self._record_failure()

    def process(self, item: WorkItem) -> None:
        """Apply the skip/fetch/record steps to a single item."""
        if item.url == "":
            logger.info("no URI for painting %d (%r by %r)", item.id, item.title, item.artist)
            self.stats.increment(NO_URI)
            return
        if file_exists(item.destination):
            self.stats.increment(ALREADY_EXISTED)
            return

        url = upgrade_image_url(item.url)
        logger.info("downloading %s -> %s", url, item.destination)
        try:
            self.fetcher.fetch(url, item.destination)
        except FetchError as exc:
            logger.warning("error: %s", exc)
            self._record_failure()
        except Exception:  # pylint: disable=broad-except
            logger.exception("Unexpected error downloading %s", url)
            self._record_failure()
        else:
            self.stats.increment(DOWNLOADED)

    def _record_failure(self) -> None:
        self.stats.increment(ERRORED)
        if self.count_failures_as_downloaded:
            self.stats.increment(DOWNLOADED)


def run_pipeline(
    items: Iterable[WorkItem],
    config: DownloadConfig,
    fetcher: Optional[Fetcher] = None,
) -> DownloadStats:
    """Download every item with ``config.threads`` workers and return the tallies."""
    ensure_dir(config.images_dir)
    stats = DownloadStats()
    work_queue: Queue = Queue(maxsize=config.threads)

    owned_fetcher: Optional[ImageFetcher] = None
    if fetcher is None:
        owned_fetcher = ImageFetcher(timeout=config.timeout, pool_size=config.threads)
        fetcher = owned_fetcher

    try:
        pool = WorkerPool(
            config.threads,
            work_queue,
            fetcher,
            stats,
            count_failures_as_downloaded=config.count_failures_as_downloaded,
        )
        dispatcher = Dispatcher(items, work_queue, config.threads)
        pool.start()
        dispatcher.start()
        dispatcher.join()
        pool.join()
        if dispatcher.error is not None:
            raise dispatcher.error
    finally:
        if owned_fetcher is not None:
            owned_fetcher.close()

    logger.info("stats: %s", stats)
    return stats


def download_paintings(
    config: DownloadConfig, fetcher: Optional[Fetcher] = None
) -> DownloadStats:
    """Load the catalog, then download every painting image it references."""
    paintings = load_paintings(config)
    logger.info("have %d paintings", len(paintings))
    items = build_work_items(paintings, config.images_dir)
    return run_pipeline(items, config, fetcher=fetcher)

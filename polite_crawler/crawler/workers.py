# polite_crawler/crawler/workers.py
"""
Fetch and index stages, plus the plumbing they share.

Both stages are plain functions meant to run as thread targets. They talk
only through two :class:`ClosableQueue` objects; the single piece of shared
mutable state is the :class:`~polite_crawler.crawler.visited.VisitedSet`.
Every URL that enters the download queue is counted in a
:class:`WorkTracker` and released exactly once when its processing ends,
which is how the orchestrator knows the crawl is over.
"""
from __future__ import annotations

import queue
import threading
import time
from collections import Counter
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from polite_crawler.crawler.fetcher import DownloadError
from polite_crawler.crawler.models import CrawlTask, FetchResult, PolitenessPolicy
from polite_crawler.crawler.visited import VisitedSet
from polite_crawler.index import Index
from polite_crawler.logger import logger
from polite_crawler.parser.stemmer import StemError

__all__ = (
    "ClosableQueue",
    "WorkTracker",
    "CrawlStats",
    "CrawlPrimitives",
    "fetch_worker",
    "index_worker",
)

_CLOSED = object()


class ClosableQueue(queue.Queue):
    """Bounded FIFO queue whose iteration ends once it is closed and drained."""

    def __init__(self, maxsize: int = 0) -> None:
        super().__init__(maxsize)
        self._closed = False

    def close(self) -> None:
        """Close the queue. Items already buffered are still delivered."""
        with self.mutex:
            if self._closed:
                raise RuntimeError("queue already closed")
            self._closed = True
        self.put(_CLOSED)

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> Iterator[Any]:
        while True:
            item = self.get()
            if item is _CLOSED:
                # hand the marker on so every other consumer stops too
                self.put(_CLOSED)
                return
            yield item


class WorkTracker:
    """Counts URLs that are queued or being processed.

    ``add`` is called before a URL is put on the download queue, ``done``
    when the URL's processing has finished (children, if any, already
    added). The count therefore only reaches zero when both queues are
    empty and no worker holds a task.
    """

    def __init__(self) -> None:
        self._pending = 0
        self._cond = threading.Condition()

    def add(self, n: int = 1) -> None:
        with self._cond:
            self._pending += n

    def done(self) -> None:
        with self._cond:
            if self._pending <= 0:
                raise RuntimeError("done() called more times than add()")
            self._pending -= 1
            if self._pending == 0:
                self._cond.notify_all()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until no work is pending. Returns False on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: self._pending == 0, timeout)

    @property
    def pending(self) -> int:
        with self._cond:
            return self._pending


class CrawlStats:
    """Thread-safe counters shared by all workers of one crawl."""

    def __init__(self) -> None:
        self._counts: Counter[str] = Counter()
        self._lock = threading.Lock()

    def incr(self, name: str, n: int = 1) -> None:
        with self._lock:
            self._counts[name] += n

    def __getitem__(self, name: str) -> int:
        with self._lock:
            return self._counts[name]

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counts)


@dataclass(frozen=True)
class CrawlPrimitives:
    """The external collaborators a crawl is wired with."""

    download: Callable[[str], bytes]
    extract: Callable[[bytes], Tuple[List[str], List[str]]]
    clean: Callable[[str, Iterable[str]], List[str]]
    stem: Callable[[str, str, bool], str]


def _report_mean(stage: str, durations: List[float]) -> None:
    if not durations:
        logger.info("No %s tasks processed", stage)
        return
    mean_ms = sum(durations) / len(durations) * 1000
    logger.info("The average time for %s is %.1fms over %d task(s)", stage, mean_ms, len(durations))


def fetch_worker(
    download_queue: ClosableQueue,
    extract_queue: ClosableQueue,
    policy: PolitenessPolicy,
    download: Callable[[str], bytes],
    tracker: WorkTracker,
    stats: CrawlStats,
) -> None:
    """Download allowed URLs and hand their bodies to the index stage."""
    durations: List[float] = []
    task: CrawlTask
    for task in download_queue:
        start = time.monotonic()
        if not policy.allows(task):
            stats.incr("disallowed")
            tracker.done()
            durations.append(time.monotonic() - start)
            continue

        try:
            content = download(task)
        except DownloadError as exc:
            logger.warning("Failed %s: %s", task, exc.reason)
            stats.incr("failed")
            tracker.done()
        except Exception:
            logger.exception("Unexpected error downloading %s", task)
            stats.incr("failed")
            tracker.done()
        else:
            stats.incr("fetched")
            # the tracker slot travels on with the result
            extract_queue.put(FetchResult(task, content))

        time.sleep(policy.crawl_delay)
        durations.append(time.monotonic() - start)
    _report_mean("Download", durations)


def _stem_words(words: Iterable[str], stem: Callable[[str, str, bool], str], language: str) -> List[str]:
    stemmed: List[str] = []
    for word in words:
        try:
            stemmed.append(stem(word, language, True))
        except StemError as exc:
            logger.debug("Snowball error: %s", exc)
    return stemmed


def index_worker(
    download_queue: ClosableQueue,
    extract_queue: ClosableQueue,
    index: Index,
    base_url: str,
    host: str,
    visited: VisitedSet,
    tracker: WorkTracker,
    stats: CrawlStats,
    primitives: CrawlPrimitives,
    language: str = "english",
) -> None:
    """Extract, stem and index fetched pages; queue new same-host links."""
    durations: List[float] = []
    result: FetchResult
    for result in extract_queue:
        start = time.monotonic()
        try:
            words, hrefs = primitives.extract(result.content)
            current_words = _stem_words(words, primitives.stem, language)

            for link in primitives.clean(base_url, hrefs):
                if visited.claim(link, host):
                    tracker.add()
                    stats.incr("discovered")
                    download_queue.put(link)

            index.add_to_index(result.url, current_words)
            stats.incr("indexed")
        except Exception:
            logger.exception("Failed to index %s", result.url)
        finally:
            tracker.done()
        durations.append(time.monotonic() - start)
    _report_mean("Index", durations)

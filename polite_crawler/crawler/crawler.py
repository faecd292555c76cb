# === FILE: polite_crawler/crawler/crawler.py ===
from __future__ import annotations

import functools
import threading
import time
from typing import Any, Callable, Iterable, List, Optional, Tuple

from polite_crawler.config import CrawlerConfig
from polite_crawler.crawler import fetcher
from polite_crawler.crawler.link_extractor import clean, normalize_url
from polite_crawler.crawler.models import CrawlReport, PolitenessPolicy
from polite_crawler.crawler.robots import load_policy
from polite_crawler.crawler.visited import VisitedSet
from polite_crawler.crawler.workers import (
    ClosableQueue,
    CrawlPrimitives,
    CrawlStats,
    WorkTracker,
    fetch_worker,
    index_worker,
)
from polite_crawler.index import Index
from polite_crawler.logger import logger
from polite_crawler.parser.html_parser import extract
from polite_crawler.parser.stemmer import stem

__all__ = ("Crawler", "crawl")


class Crawler:
    """Threaded crawler of a single host, honoring its robots.txt.

    The external primitives default to the package's own implementations
    and can be swapped (tests feed in-memory sites this way).
    """

    def __init__(
        self,
        config: CrawlerConfig,
        index: Index,
        *,
        download: Optional[Callable[[str], bytes]] = None,
        extract: Callable[[bytes], Tuple[List[str], List[str]]] = extract,
        clean: Callable[[str, Iterable[str]], List[str]] = clean,
        stem: Callable[[str, str, bool], str] = stem,
    ) -> None:
        self.config = config
        self.index = index
        if download is None:
            download = functools.partial(
                fetcher.download, timeout=config.timeout, user_agent=config.user_agent
            )
        self.primitives = CrawlPrimitives(download=download, extract=extract, clean=clean, stem=stem)
        self.visited = VisitedSet()
        self.policy: Optional[PolitenessPolicy] = None

    def run(self) -> CrawlReport:
        """Crawl until no work is left; blocks the calling thread."""
        start = time.monotonic()
        seed = normalize_url(self.config.base_url)
        host = self.config.host
        self.visited.add(seed)
        logger.info("Crawl started: %s", seed)

        self.policy = load_policy(host, self.primitives.download, self.config.default_crawl_delay)
        download_queue = ClosableQueue(self.config.queue_size)
        extract_queue = ClosableQueue(self.config.queue_size)
        tracker = WorkTracker()
        stats = CrawlStats()

        tracker.add()
        download_queue.put(seed)

        threads = [
            threading.Thread(
                target=fetch_worker,
                args=(download_queue, extract_queue, self.policy, self.primitives.download, tracker, stats),
                name=f"fetch-{i}",
                daemon=True,
            )
            for i in range(self.config.fetch_workers)
        ]
        threads += [
            threading.Thread(
                target=index_worker,
                args=(
                    download_queue, extract_queue, self.index, self.config.base_url, host,
                    self.visited, tracker, stats, self.primitives, self.config.language,
                ),
                name=f"index-{i}",
                daemon=True,
            )
            for i in range(self.config.index_workers)
        ]
        for thread in threads:
            thread.start()

        tracker.wait()
        download_queue.close()
        extract_queue.close()
        for thread in threads:
            thread.join()

        elapsed = time.monotonic() - start
        report = CrawlReport(
            base_url=seed,
            crawl_delay=self.policy.crawl_delay,
            disallowed_patterns=sorted(self.policy.disallowed_patterns),
            pages_fetched=stats["fetched"],
            pages_failed=stats["failed"],
            pages_disallowed=stats["disallowed"],
            pages_indexed=stats["indexed"],
            urls_discovered=stats["discovered"],
            elapsed=elapsed,
        )
        logger.info(
            "Finished: %d page(s) indexed in %.2f s (%d disallowed, %d failed)",
            report.pages_indexed, elapsed, report.pages_disallowed, report.pages_failed,
        )
        return report


def crawl(base_url: str, index: Index, **kwargs: Any) -> CrawlReport:
    """Blocking crawl of *base_url*, feeding *index*.

    Keyword arguments named after :class:`Crawler` primitives (``download``,
    ``extract``, ``clean``, ``stem``) replace them; all others are
    :class:`CrawlerConfig` fields.
    """
    primitives = {k: kwargs.pop(k) for k in ("download", "extract", "clean", "stem") if k in kwargs}
    config = CrawlerConfig(base_url=base_url, **kwargs)
    return Crawler(config, index, **primitives).run()

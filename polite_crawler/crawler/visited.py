# polite_crawler/crawler/visited.py
"""
Visited-set coordinator shared by all index workers.
"""
from __future__ import annotations

import threading
from typing import Dict, Iterator
from urllib.parse import urlparse


class VisitedSet:
    """Mapping url -> True, guarded by a single lock.

    A URL is inserted at most once and never removed during a crawl run.
    """

    def __init__(self) -> None:
        self._urls: Dict[str, bool] = {}
        self._lock = threading.Lock()

    def add(self, url: str) -> bool:
        """Mark *url* visited; return False if it already was."""
        with self._lock:
            if self._urls.get(url):
                return False
            self._urls[url] = True
            return True

    def claim(self, url: str, host: str) -> bool:
        """Atomically check that *url* is on *host* and unvisited, and mark it.

        Returns True only for the single caller that should enqueue the URL.
        """
        with self._lock:
            if self._urls.get(url) or urlparse(url).netloc.lower() != host:
                return False
            self._urls[url] = True
            return True

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return bool(self._urls.get(url))  # type: ignore[arg-type]

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._urls))

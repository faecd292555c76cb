# polite_crawler/crawler/models.py
"""
Data models shared by the crawl stages.
"""
from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass, field
from typing import FrozenSet

#: A URL waiting in the download queue. Nothing else travels with it.
CrawlTask = str

DEFAULT_CRAWL_DELAY = 0.1


@dataclass(slots=True, frozen=True)
class FetchResult:
    """Raw body of a fetched page, handed from the fetch stage to the index stage."""

    url: str
    content: bytes


@dataclass(slots=True, frozen=True)
class PolitenessPolicy:
    """Crawl delay and disallow patterns derived from a host's robots.txt.

    Immutable, so every fetch worker reads it without locking.
    """

    crawl_delay: float = DEFAULT_CRAWL_DELAY
    disallowed_patterns: FrozenSet[str] = frozenset()

    def allows(self, url: str) -> bool:
        """Return False if any disallow pattern matches somewhere in *url*."""
        for pattern in self.disallowed_patterns:
            if re.search(pattern, url):
                return False
        return True


@dataclass(slots=True)
class CrawlReport:
    """Counters collected over one crawl run."""

    base_url: str
    crawl_delay: float = DEFAULT_CRAWL_DELAY
    disallowed_patterns: list[str] = field(default_factory=list)
    pages_fetched: int = 0
    pages_failed: int = 0
    pages_disallowed: int = 0
    pages_indexed: int = 0
    urls_discovered: int = 0
    elapsed: float = 0.0

    def json(self, *, pretty: bool = False) -> str:
        """JSON representation of the report."""
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)

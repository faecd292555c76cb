"""polite_crawler.index: The pluggable index the crawler feeds, plus an in-memory implementation."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Sequence

from polite_crawler.logger import logger
from polite_crawler.parser.stemmer import StemError, stem

__all__: Sequence[str] = ("Hit", "Index", "InMemoryIndex")


@dataclass(slots=True, frozen=True)
class Hit:
    """One search result: a document URL and its score."""

    url: str
    score: float


class Index(ABC):
    """Anything that can ingest crawled pages and answer queries.

    ``add_to_index`` is called from index worker threads, possibly several
    at once; implementations must be thread-safe.
    """

    @abstractmethod
    def add_to_index(self, url: str, words: List[str]) -> None:
        """Ingest the stemmed *words* of the page at *url*."""

    @abstractmethod
    def search(self, query: str) -> List[Hit]:
        """Return hits for *query*, best first."""


class InMemoryIndex(Index):
    """Inverted index ``term -> {url: count}`` held in memory.

    Query terms go through the same stemmer the crawler uses, so
    ``search("running")`` finds pages that contained "runs".
    """

    def __init__(
        self,
        language: str = "english",
        stem_word: Callable[[str, str, bool], str] = stem,
    ) -> None:
        self.language = language
        self._stem = stem_word
        self._postings: Dict[str, Dict[str, int]] = defaultdict(dict)
        self._docs: Dict[str, int] = {}
        self._lock = threading.Lock()

    def add_to_index(self, url: str, words: List[str]) -> None:
        counts = Counter(words)
        with self._lock:
            if url in self._docs:
                self._drop(url)
            self._docs[url] = len(words)
            for term, count in counts.items():
                self._postings[term][url] = count
        logger.debug("Indexed %s (%d words, %d terms)", url, len(words), len(counts))

    def _drop(self, url: str) -> None:
        for term in list(self._postings):
            postings = self._postings[term]
            postings.pop(url, None)
            if not postings:
                del self._postings[term]

    def _query_terms(self, query: str) -> Iterable[str]:
        for raw in query.split():
            try:
                yield self._stem(raw, self.language, True)
            except StemError:
                continue

    def search(self, query: str) -> List[Hit]:
        scores: Dict[str, float] = defaultdict(float)
        with self._lock:
            for term in set(self._query_terms(query)):
                for url, count in self._postings.get(term, {}).items():
                    scores[url] += count
        return sorted(
            (Hit(url, score) for url, score in scores.items()),
            key=lambda h: (-h.score, h.url),
        )

    def documents(self) -> List[str]:
        """URLs of every indexed page, sorted."""
        with self._lock:
            return sorted(self._docs)

    def __len__(self) -> int:
        with self._lock:
            return len(self._docs)

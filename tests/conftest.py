# File: tests/conftest.py
from __future__ import annotations

import threading
import time
from collections import Counter
from typing import Dict, List, Tuple

import pytest

from polite_crawler.crawler.fetcher import DownloadError
from polite_crawler.index import Hit, Index


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


class FakeSite:
    """In-memory web site standing in for the download primitive."""

    def __init__(self, pages: Dict[str, str]) -> None:
        self.pages = pages
        self.requests: List[Tuple[str, float]] = []
        self._lock = threading.Lock()

    def download(self, url: str) -> bytes:
        with self._lock:
            self.requests.append((url, time.monotonic()))
        if url not in self.pages:
            raise DownloadError(url, "HTTP 404")
        return self.pages[url].encode("utf-8")

    @property
    def requested(self) -> List[str]:
        with self._lock:
            return [url for url, _ in self.requests]

    def request_counts(self) -> Counter:
        return Counter(self.requested)


class RecordingIndex(Index):
    """Index that just remembers every add_to_index call."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, List[str]]] = []
        self._lock = threading.Lock()

    def add_to_index(self, url: str, words: List[str]) -> None:
        with self._lock:
            self.calls.append((url, list(words)))

    def search(self, query: str) -> List[Hit]:
        return [Hit(url, 1.0) for url, words in self.calls if query in words]

    @property
    def urls(self) -> List[str]:
        return [url for url, _ in self.calls]

    def words_for(self, url: str) -> List[str]:
        for call_url, words in self.calls:
            if call_url == url:
                return words
        raise KeyError(url)


@pytest.fixture()
def make_site():
    """Factory for FakeSite instances."""
    return FakeSite


@pytest.fixture()
def recording_index() -> RecordingIndex:
    return RecordingIndex()


@pytest.fixture()
def config_files(tmp_path):
    """Write a config both as YAML and as JSON; return the two paths."""
    yaml_path = tmp_path / "crawl.yaml"
    json_path = tmp_path / "crawl.json"
    yaml_path.write_text("base_url: http://example.com/\nfetch_workers: 2\n", encoding="utf-8")
    json_path.write_text('{"base_url": "http://example.com/", "index_workers": 3}', encoding="utf-8")
    return {"yaml": yaml_path, "json": json_path}

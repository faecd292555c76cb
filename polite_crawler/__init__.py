"""
polite_crawler package initializer.
Defines package version and exposes the crawl entry point and CLI.
"""
__version__ = "0.1.0"

from polite_crawler.crawler import Crawler, crawl
from polite_crawler.index import Hit, Index, InMemoryIndex

# Expose CLI entry point
from .cli import cli

__all__ = ["__version__", "Crawler", "crawl", "Hit", "Index", "InMemoryIndex", "cli"]

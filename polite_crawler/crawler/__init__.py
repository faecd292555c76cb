"""polite_crawler.crawler: Crawl orchestration, fetch and index stages."""

from polite_crawler.crawler.crawler import Crawler, crawl
from polite_crawler.crawler.fetcher import DownloadError, download
from polite_crawler.crawler.models import CrawlReport, FetchResult, PolitenessPolicy

__all__ = [
    "Crawler",
    "crawl",
    "download",
    "DownloadError",
    "CrawlReport",
    "FetchResult",
    "PolitenessPolicy",
]

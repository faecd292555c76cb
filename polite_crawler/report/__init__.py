"""polite_crawler.report: Crawl reports written by the CLI."""

from polite_crawler.report.json_report import render_json

__all__ = ["render_json"]

"""polite_crawler.parser: Page extraction and word stemming primitives."""

from polite_crawler.parser.html_parser import extract
from polite_crawler.parser.stemmer import StemError, stem

__all__ = ["extract", "stem", "StemError"]

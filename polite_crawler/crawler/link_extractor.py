# polite_crawler/crawler/link_extractor.py
"""
Link cleaning and URL normalization for the crawler.
"""
from __future__ import annotations

from typing import Iterable, List
from urllib.parse import urldefrag, urljoin, urlparse, urlunparse

_DEFAULT_PORTS = {"http": 80, "https": 443}


def normalize_url(url: str) -> str:
    """
    Canonical form of an absolute URL: lower-case scheme and host,
    default port dropped, fragment removed, empty path becomes "/".
    """
    url, _ = urldefrag(url)
    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    netloc = (parsed.hostname or "").lower()
    if ":" in netloc:
        netloc = f"[{netloc}]"
    try:
        port = parsed.port
    except ValueError:
        port = None
    if port and port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{netloc}:{port}"
    path = parsed.path or "/"
    return urlunparse((scheme, netloc, path, parsed.params, parsed.query, ""))


def clean(base_url: str, hrefs: Iterable[str]) -> List[str]:
    """
    Resolve raw href values against *base_url* and normalize them.

    Ignores mailto:, javascript:, other non-HTTP schemes and empty/fragment-only refs.
    """
    links: List[str] = []
    for href in hrefs:
        raw = href.strip()
        if not raw or raw.startswith("#"):
            continue
        absolute = urljoin(base_url, raw)
        parsed = urlparse(absolute)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            continue
        links.append(normalize_url(absolute))
    return links

"""
Politeness loader: turns a host's robots.txt into a :class:`PolitenessPolicy`.

Only the ``*`` user-agent group is honored. ``Crawl-delay`` is treated as a
global directive: the last one in the file wins, whatever group it sits in.
"""
from __future__ import annotations

import math
import re
from typing import Callable, Set

from polite_crawler.crawler.fetcher import DownloadError
from polite_crawler.crawler.models import DEFAULT_CRAWL_DELAY, PolitenessPolicy
from polite_crawler.logger import logger

__all__ = ("load_policy", "parse_robots", "disallow_to_regex")

# one day; anything longer would stall the fetch stage
MAX_CRAWL_DELAY = 86400.0


def disallow_to_regex(path: str) -> str:
    """Convert a Disallow path to a regex; ``*`` becomes ``.*``, the rest is literal."""
    return re.escape(path).replace(r"\*", ".*")


def parse_robots(text: str, default_delay: float = DEFAULT_CRAWL_DELAY) -> PolitenessPolicy:
    """Parse robots.txt content into a crawl delay and a set of disallow patterns."""
    crawl_delay = default_delay
    disallowed: Set[str] = set()
    in_star_group = False

    for raw in text.splitlines():
        line = raw.split("#", 1)[0].strip()
        if not line or ":" not in line:
            continue
        key, _, val = line.partition(":")
        key = key.strip().lower()
        val = val.strip()

        if key == "user-agent":
            in_star_group = val == "*"
        elif key == "disallow":
            # empty Disallow allows everything
            if in_star_group and val:
                disallowed.add(disallow_to_regex(val))
        elif key == "crawl-delay":
            try:
                delay = float(val)
            except ValueError:
                logger.warning("robots.txt crawl delay incorrectly formatted: %r", val)
                continue
            if not math.isfinite(delay) or not 0 <= delay <= MAX_CRAWL_DELAY:
                logger.warning("robots.txt crawl delay out of range: %r", val)
                continue
            crawl_delay = delay

    return PolitenessPolicy(crawl_delay=crawl_delay, disallowed_patterns=frozenset(disallowed))


def load_policy(
    host: str,
    download: Callable[[str], bytes],
    default_delay: float = DEFAULT_CRAWL_DELAY,
) -> PolitenessPolicy:
    """
    Fetch ``http://<host>/robots.txt`` and parse it.

    A missing or unreachable file is not an error: the default policy
    (default delay, nothing disallowed) is returned.
    """
    robots_url = f"http://{host}/robots.txt"
    try:
        body = download(robots_url)
    except DownloadError as exc:
        logger.info("No robots file found (%s), continuing standard crawling", exc.reason)
        return PolitenessPolicy(crawl_delay=default_delay)

    policy = parse_robots(body.decode("utf-8", errors="replace"), default_delay)
    logger.debug(
        "robots.txt for %s: delay=%.2fs, %d disallow rule(s)",
        host, policy.crawl_delay, len(policy.disallowed_patterns),
    )
    return policy

# polite_crawler/crawler/fetcher.py
"""
Download primitive: retrieves the raw body of one URL.

The crawl stages run in plain threads, so :func:`download` is blocking; it
drives the aiohttp request on an event loop private to the calling thread.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession, ClientTimeout

DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "PoliteCrawler/1.0"


class DownloadError(Exception):
    """The URL could not be fetched (network error, timeout or non-2xx status)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


async def fetch(
    session: ClientSession,
    url: str,
) -> bytes:
    """Fetch *url* with an open session and return the body as bytes."""
    try:
        async with session.get(url, raise_for_status=False) as resp:
            if not 200 <= resp.status < 300:
                raise DownloadError(url, f"HTTP {resp.status}")
            return await resp.read()
    except asyncio.TimeoutError as exc:
        raise DownloadError(url, "timeout") from exc
    except ClientError as exc:
        raise DownloadError(url, str(exc) or type(exc).__name__) from exc


async def _download(url: str, timeout: float, user_agent: str) -> bytes:
    async with ClientSession(
        timeout=ClientTimeout(total=timeout),
        headers={"User-Agent": user_agent},
    ) as session:
        return await fetch(session, url)


def download(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> bytes:
    """
    Blocking download of *url*.

    Returns the body on a 2xx response and raises DownloadError otherwise.
    No retries: a failed page is simply reported to the caller.
    """
    return asyncio.run(_download(url, timeout, user_agent))

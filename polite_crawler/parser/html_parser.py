"""HTML extraction primitive for the crawler.

:func:`extract` turns a raw page body into two flat lists:

* words — visible text split into word tokens (``<script>``, ``<style>``
  and similar elements are skipped);
* hrefs — raw ``href`` values of ``<a>`` tags, unresolved and in document
  order, duplicates included.

Resolving and filtering links is the job of
:func:`polite_crawler.crawler.link_extractor.clean`.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = ("extract",)

_WORD_RE = re.compile(r"[^\W_]+(?:['’][^\W_]+)*")
_INVISIBLE = ["script", "style", "noscript", "template"]


def extract(content: bytes | str) -> Tuple[list[str], list[str]]:
    """Return ``(words, hrefs)`` found in *content*."""
    soup = BeautifulSoup(content, "html.parser")

    hrefs: list[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if isinstance(href, str):
            hrefs.append(href)

    for element in soup(_INVISIBLE):
        element.decompose()
    words = _WORD_RE.findall(soup.get_text(" "))

    return words, hrefs

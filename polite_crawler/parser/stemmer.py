"""polite_crawler.parser.stemmer: Snowball stemming of single words."""

from __future__ import annotations

import string
import threading
from typing import Dict

import snowballstemmer

__all__ = ("StemError", "stem", "normalize_word")

# Snowball stemmer objects keep state while stemming, so every thread gets its own.
_local = threading.local()


class StemError(ValueError):
    """The word cannot be stemmed (unsupported language or no letters left)."""


def _stemmer(language: str):
    cache: Dict[str, object] = getattr(_local, "stemmers", None) or {}
    _local.stemmers = cache
    if language not in cache:
        try:
            cache[language] = snowballstemmer.stemmer(language)
        except KeyError as exc:
            raise StemError(f"unsupported stemmer language: {language!r}") from exc
    return cache[language]


def normalize_word(word: str) -> str:
    """Lower-case *word* and strip surrounding punctuation."""
    return word.strip().strip(string.punctuation + "“”‘’«»").lower()


def stem(word: str, language: str = "english", normalize_punctuation: bool = True) -> str:
    """Return the Snowball stem of *word*.

    Args:
        word: a single token.
        language: Snowball algorithm name, e.g. ``"english"``.
        normalize_punctuation: lower-case and strip punctuation first.

    Raises:
        StemError: unknown language, or nothing left to stem.
    """
    if normalize_punctuation:
        word = normalize_word(word)
    if not word or not any(ch.isalnum() for ch in word):
        raise StemError(f"nothing to stem in {word!r}")
    return _stemmer(language).stemWord(word)

# === FILE: polite_crawler/config.py ===
"""
Loading and validation of the crawler configuration.
Pydantic describes the schema; YAML and JSON files are accepted.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union
from urllib.parse import urlparse

import snowballstemmer
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from polite_crawler.crawler.link_extractor import normalize_url


class CrawlerConfig(BaseModel):
    """Settings for a single crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = Field(..., description="Seed URL; only links on its host are followed.")
    fetch_workers: int = Field(1, ge=1, description="Number of fetch threads.")
    index_workers: int = Field(1, ge=1, description="Number of extraction/index threads.")
    queue_size: int = Field(1000, ge=1, description="Capacity of each bounded queue.")
    default_crawl_delay: float = Field(
        0.1, ge=0, description="Delay between fetches when robots.txt sets none (seconds)."
    )
    timeout: float = Field(10.0, gt=0, description="Timeout for one request (seconds).")
    user_agent: str = Field("PoliteCrawler/1.0", min_length=1, description="User-Agent header.")
    language: str = Field("english", min_length=1, description="Stemmer language.")

    @field_validator("base_url", mode="before")
    def _check_base_url(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError(f"base_url must be an absolute http(s) URL, got {v!r}")
        return v

    @field_validator("language")
    def _check_language(cls, v: str) -> str:
        if v not in snowballstemmer.algorithms():
            raise ValueError(f"unsupported stemmer language: {v!r}")
        return v

    @property
    def host(self) -> str:
        """Canonical host (and non-default port) the crawl is confined to."""
        return urlparse(normalize_url(self.base_url)).netloc


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Read YAML or JSON and return a validated CrawlerConfig.
    Raises FileNotFoundError when the file does not exist.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return CrawlerConfig(**data)


__all__ = ["CrawlerConfig", "load_config", "ValidationError"]

# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from polite_crawler.config import CrawlerConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("base_url: http://example.com/", ".yaml", None),
        (json.dumps({"base_url": "http://example.com/"}), ".json", None),
        ("{}", ".json", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- just\n- a list", ".yaml", TypeError),
        ("{broken json", ".json", ValueError),
        ("base_url: http://example.com/", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlerConfig)
        assert cfg.base_url == "http://example.com/"


def test_defaults():
    cfg = CrawlerConfig(base_url="http://x.test/a")
    assert cfg.fetch_workers == 1
    assert cfg.index_workers == 1
    assert cfg.queue_size == 1000
    assert cfg.default_crawl_delay == pytest.approx(0.1)
    assert cfg.language == "english"
    assert cfg.host == "x.test"


@pytest.mark.parametrize(
    "url,host",
    [
        ("http://X.test:80/", "x.test"),
        ("https://x.test:443/a", "x.test"),
        ("http://x.test:8080/", "x.test:8080"),
        ("http://[::1]:8080/", "[::1]:8080"),
    ],
)
def test_host_matches_normalized_links(url, host):
    assert CrawlerConfig(base_url=url).host == host


def test_yaml_and_json_overrides(config_files):
    assert load_config(config_files["yaml"]).fetch_workers == 2
    assert load_config(config_files["json"]).index_workers == 3


@pytest.mark.parametrize("url", ["not a url", "ftp://x.test/", "http://", "/relative/path", ""])
def test_unparseable_base_url_is_rejected(url):
    with pytest.raises(ValidationError):
        CrawlerConfig(base_url=url)


@pytest.mark.parametrize("field,value", [("fetch_workers", 0), ("queue_size", 0), ("timeout", 0)])
def test_bounds(field, value):
    with pytest.raises(ValidationError):
        CrawlerConfig(base_url="http://x.test/", **{field: value})


def test_unknown_field_forbidden():
    with pytest.raises(ValidationError):
        CrawlerConfig(base_url="http://x.test/", max_depth=3)


def test_config_is_frozen():
    cfg = CrawlerConfig(base_url="http://x.test/")
    with pytest.raises(ValidationError):
        cfg.fetch_workers = 5


def test_load_config_default_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        load_config(None)


def test_load_config_default_present(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("base_url: http://x.test/\n", encoding="utf-8")
    assert load_config(None).base_url == "http://x.test/"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_unknown_stemmer_language_rejected():
    with pytest.raises(ValidationError):
        CrawlerConfig(base_url="http://x.test/", language="klingon")
    assert CrawlerConfig(base_url="http://x.test/", language="german").language == "german"

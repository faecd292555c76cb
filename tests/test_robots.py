# File: tests/test_robots.py
from __future__ import annotations

import pytest

from polite_crawler.crawler.fetcher import DownloadError
from polite_crawler.crawler.models import PolitenessPolicy
from polite_crawler.crawler.robots import disallow_to_regex, load_policy, parse_robots


def test_star_group_disallow_rewrites_wildcard():
    policy = parse_robots("User-agent: *\nDisallow: /private/*\n")
    assert policy.disallowed_patterns == frozenset({"/private/.*"})
    assert not policy.allows("http://x.test/private/page")
    assert policy.allows("http://x.test/public/page")


def test_other_user_agents_are_ignored():
    text = (
        "User-agent: Googlebot\n"
        "Disallow: /google-only\n"
        "User-agent: *\n"
        "Disallow: /tmp\n"
        "User-agent: BadBot\n"
        "Disallow: /\n"
    )
    policy = parse_robots(text)
    assert policy.disallowed_patterns == frozenset({"/tmp"})


def test_user_agent_must_be_exactly_star():
    policy = parse_robots("User-agent: *bot\nDisallow: /x\n")
    assert policy.disallowed_patterns == frozenset()


def test_crawl_delay_is_global_and_last_wins():
    text = (
        "User-agent: *\n"
        "Crawl-delay: 1\n"
        "User-agent: OtherBot\n"
        "Crawl-delay: 5\n"
    )
    assert parse_robots(text).crawl_delay == pytest.approx(5.0)


def test_malformed_crawl_delay_keeps_previous():
    text = "User-agent: *\nCrawl-delay: 2\nCrawl-delay: soon\n"
    policy = parse_robots(text)
    assert policy.crawl_delay == pytest.approx(2.0)


def test_malformed_first_delay_keeps_default():
    assert parse_robots("Crawl-delay: abc\n", default_delay=0.1).crawl_delay == pytest.approx(0.1)


def test_negative_delay_ignored():
    assert parse_robots("Crawl-delay: -3\n").crawl_delay == pytest.approx(0.1)


@pytest.mark.parametrize("value", ["nan", "inf", "-inf", "1e400", "90000"])
def test_unsleepable_delay_keeps_previous(value):
    policy = parse_robots(f"User-agent: *\nCrawl-delay: 2\nCrawl-delay: {value}\n")
    assert policy.crawl_delay == pytest.approx(2.0)


def test_disallow_before_any_user_agent_is_ignored():
    assert parse_robots("Disallow: /x\n").disallowed_patterns == frozenset()


def test_empty_disallow_and_comments():
    text = "# robots\nUser-agent: * # everyone\nDisallow:\nDisallow: /admin # secret\n"
    policy = parse_robots(text)
    assert policy.disallowed_patterns == frozenset({"/admin"})


def test_directive_names_case_insensitive_and_crlf():
    policy = parse_robots("user-agent: *\r\ndisallow: /a\r\ncrawl-DELAY: 0.5\r\n")
    assert policy.disallowed_patterns == frozenset({"/a"})
    assert policy.crawl_delay == pytest.approx(0.5)


def test_regex_metacharacters_are_literal():
    pattern = disallow_to_regex("/search?q=*")
    policy = PolitenessPolicy(disallowed_patterns=frozenset({pattern}))
    assert not policy.allows("http://x.test/search?q=python")
    assert policy.allows("http://x.test/searchXq=python")


def test_load_policy_missing_robots_defaults():
    def download(url):
        raise DownloadError(url, "HTTP 404")

    policy = load_policy("x.test", download)
    assert policy.crawl_delay == pytest.approx(0.1)
    assert policy.disallowed_patterns == frozenset()
    assert policy.allows("http://x.test/anything")


def test_load_policy_fetches_robots_over_http():
    requested = []

    def download(url):
        requested.append(url)
        return b"User-agent: *\nDisallow: /private/*\nCrawl-delay: 2\n"

    policy = load_policy("x.test:8080", download)
    assert requested == ["http://x.test:8080/robots.txt"]
    assert policy.crawl_delay == pytest.approx(2.0)
    assert policy.disallowed_patterns == frozenset({"/private/.*"})


def test_load_policy_custom_default_delay():
    def download(url):
        raise DownloadError(url, "timeout")

    assert load_policy("x.test", download, default_delay=0.0).crawl_delay == 0.0

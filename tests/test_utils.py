# File: tests/test_utils.py
import pytest

from meta_scout.errors import InvalidURL
from meta_scout.utils import hostname, parse_url, same_domain


@pytest.mark.parametrize(
    "raw",
    [
        "https://example.com",
        "https://example.com/",
        "http://example.com/a/b?x=1#top",
        "HTTPS://Example.com/Path",
        "http://localhost:8080/page",
        "http://[::1]:8000/",
    ],
)
def test_parse_url_accepts_and_keeps_string(raw):
    assert parse_url(raw) == raw


@pytest.mark.parametrize(
    "raw",
    [
        "not-a-url",
        "",
        "/relative/path",
        "example.com/page",
        "ftp://example.com/file",
        "mailto:someone@example.com",
        "javascript:void(0)",
        "http://[::1",
        "http://example.com:port/",
        "http:///path-only",
        " https://example.com",
        None,
        42,
    ],
)
def test_parse_url_rejects(raw):
    with pytest.raises(InvalidURL) as exc_info:
        parse_url(raw)
    assert exc_info.value.url == raw
    # InvalidURL is also a ValueError for callers that do not know the package
    assert isinstance(exc_info.value, ValueError)


def test_hostname_is_lowercased_by_parsing():
    assert hostname("https://Example.COM:443/x") == "example.com"


def test_same_domain_is_exact_hostname_equality():
    assert same_domain("https://example.com/a", "example.com")
    assert same_domain("http://example.com:8080/b", "example.com")
    assert not same_domain("https://www.example.com/", "example.com")
    assert not same_domain("https://sub.example.com/", "example.com")
    assert not same_domain("https://other.com/x", "example.com")

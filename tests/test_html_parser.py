# File: tests/test_html_parser.py
from meta_scout.parser.html_parser import extract_page_data

BASE = "https://example.com/docs/index.html"


def test_title_is_stripped_and_defaults_to_empty():
    assert extract_page_data("<title>\n  Docs  </title>", BASE).title == "Docs"
    assert extract_page_data("<p>no title</p>", BASE).title == ""


def test_meta_name_then_property_in_document_order():
    html = """
    <meta name="description" content="one">
    <meta property="og:image" content="/img.png">
    <meta name="keywords" property="ignored" content="a,b">
    <meta charset="utf-8">
    <meta name="robots">
    <meta name="empty" content="">
    <meta name="description" content="two">
    """
    pairs = extract_page_data(html, BASE).meta_pairs
    assert pairs == (
        ("description", "one"),
        ("og:image", "/img.png"),
        ("keywords", "a,b"),
        ("description", "two"),
    )


def test_links_resolved_against_page_url():
    html = """
    <a href="guide.html">relative</a>
    <a href="/root">absolute path</a>
    <a href="//cdn.example.com/x">protocol relative</a>
    <a href="https://other.com/y#frag">external with fragment</a>
    <a href="#top">fragment only</a>
    <a href="mailto:me@example.com">mail</a>
    <a href="javascript:void(0)">js</a>
    <a href="ftp://example.com/file">ftp</a>
    <a>no href</a>
    """
    links = extract_page_data(html, BASE).links
    assert links == (
        "https://example.com/docs/guide.html",
        "https://example.com/root",
        "https://cdn.example.com/x",
        "https://other.com/y#frag",
        "https://example.com/docs/index.html#top",
    )


def test_duplicates_and_malformed_hrefs_are_kept_for_the_engine():
    html = '<a href="/a">1</a><a href="/a">2</a><a href="http://[::1">bad</a>'
    links = extract_page_data(html, BASE).links
    assert links == ("https://example.com/a", "https://example.com/a", "http://[::1")


def test_title_whitespace_is_collapsed():
    assert extract_page_data("<title>Home\n    page\t x</title>", BASE).title == "Home page x"


def test_links_resolved_against_base_href():
    html = """
    <head><base href="https://example.com/en/"></head>
    <a href="about">about</a>
    <a href="/root">absolute path</a>
    """
    links = extract_page_data(html, "https://example.com/").links
    assert links == ("https://example.com/en/about", "https://example.com/root")


def test_relative_base_href_resolves_against_page_url():
    html = '<base href="/v2/"><a href="guide.html">guide</a>'
    assert extract_page_data(html, BASE).links == ("https://example.com/v2/guide.html",)

"""
Parser Utility Tests

Tests for HTML link extraction and URL normalisation.
"""

from rankcrawler.utils.parser import extract_links
from linkgraph.core.utils import get_host, normalize_url


# ==========================================
# Tests for normalize_url
# ==========================================


def test_normalize_url_relative():
    assert normalize_url("http://example.com/dir/page", "other") == "http://example.com/dir/other"


def test_normalize_url_absolute():
    assert normalize_url("http://example.com/", "https://other.com/foo") == "https://other.com/foo"


def test_normalize_url_remove_fragment():
    assert normalize_url("http://example.com", "/page#section") == "http://example.com/page"


def test_normalize_url_remove_tracking_params():
    normalized = normalize_url(
        "http://example.com", "/item?id=123&utm_source=twitter&fbclid=xyz"
    )
    assert normalized == "http://example.com/item?id=123"


def test_normalize_url_lowercase_scheme_and_host():
    assert normalize_url("HTTP://EXAMPLE.COM", "/Foo") == "http://example.com/Foo"


def test_normalize_url_keeps_port():
    assert normalize_url("http://example.com:8080/", "/a") == "http://example.com:8080/a"


def test_normalize_url_rejects_non_http():
    assert normalize_url("http://example.com", "mailto:a@example.com") is None
    assert normalize_url("http://example.com", "javascript:void(0)") is None


def test_normalize_url_empty_link():
    assert normalize_url("http://example.com", "") is None
    assert normalize_url("http://example.com", None) is None


def test_normalize_url_too_long():
    assert normalize_url("http://example.com", "/" + "a" * 3000) is None


def test_get_host():
    assert get_host("https://WWW.Example.com/path") == "www.example.com"
    assert get_host("not a url") == ""


# ==========================================
# Tests for extract_links
# ==========================================


def test_extract_links_document_order():
    html = """
    <html><body>
      <a href="/first">1</a>
      <a href="https://other.com/second">2</a>
      <a href="third">3</a>
    </body></html>
    """
    links = extract_links("https://example.com/dir/", html)
    assert links == [
        "https://example.com/first",
        "https://other.com/second",
        "https://example.com/dir/third",
    ]


def test_extract_links_skips_unusable_hrefs():
    html = """
    <a>no href</a>
    <a href="">empty</a>
    <a href="mailto:x@example.com">mail</a>
    <a href="javascript:void(0)">js</a>
    <a href="/ok">ok</a>
    """
    assert extract_links("https://example.com/", html) == ["https://example.com/ok"]


def test_extract_links_limit():
    html = "".join(f'<a href="/p{i}">{i}</a>' for i in range(10))
    links = extract_links("https://example.com/", html, limit=3)
    assert links == [
        "https://example.com/p0",
        "https://example.com/p1",
        "https://example.com/p2",
    ]


def test_extract_links_honours_base_tag():
    html = '<head><base href="https://cdn.example.com/root/"></head><a href="page">x</a>'
    assert extract_links("https://example.com/", html) == [
        "https://cdn.example.com/root/page"
    ]


def test_extract_links_keeps_duplicates():
    html = '<a href="/a">1</a><a href="/a#frag">2</a>'
    assert extract_links("https://example.com/", html) == [
        "https://example.com/a",
        "https://example.com/a",
    ]


def test_extract_links_handles_nul_bytes():
    html = '<a href="/a">x\x00y</a>'
    assert extract_links("https://example.com/", html) == ["https://example.com/a"]

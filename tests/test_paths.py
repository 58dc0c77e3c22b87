# File: tests/test_paths.py
from pathlib import PurePosixPath, PureWindowsPath

import pytest

from site_fetcher.crawler.paths import host_variants, local_path_for, reconstruct_url

SEED = "https://example.com/start"


@pytest.mark.parametrize(
    "local,expected",
    [
        ("index.html", "https://example.com/"),
        ("", "https://example.com/"),
        ("about.html", "https://example.com/about"),
        ("example.com/index.html", "https://example.com/"),
        ("example.com", "https://example.com/"),
        ("example.com/about.html", "https://example.com/about"),
        ("example.com/docs/index.html", "https://example.com/docs/"),
        ("example.com/docs/intro.html", "https://example.com/docs/intro"),
        ("example.com/css/site.css", "https://example.com/css/site.css"),
        ("www.example.com/team/index.html", "https://example.com/team/"),
    ],
)
def test_reconstruct_url(local, expected):
    assert reconstruct_url(SEED, local) == expected


def test_reconstruct_keeps_seed_origin_and_port():
    seed = "http://www.example.com:8080/"
    assert reconstruct_url(seed, "example.com/a.html") == "http://www.example.com:8080/a"


def test_reconstruct_origin_drops_credentials_and_lowercases_host():
    seed = "https://user:pw@Example.COM/"
    assert reconstruct_url(seed, "example.com/a.html") == "https://example.com/a"
    assert reconstruct_url("http://[::1]:8000/", "index.html") == "http://[::1]:8000/"


def test_reconstruct_accepts_path_objects():
    assert reconstruct_url(SEED, PurePosixPath("example.com/blog/index.html")) == "https://example.com/blog/"
    assert reconstruct_url(SEED, PureWindowsPath(r"example.com\blog\post.html")) == "https://example.com/blog/post"


def test_host_variants_order():
    assert host_variants("www.example.com") == ["www.example.com", "example.com", "www.example.com"]
    assert host_variants("example.com") == ["example.com", "example.com", "www.example.com"]


@pytest.mark.parametrize(
    "url,is_html,expected",
    [
        ("https://example.com", True, "example.com/index.html"),
        ("https://example.com/", True, "example.com/index.html"),
        ("https://example.com/about", True, "example.com/about/index.html"),
        ("https://example.com/about/", True, "example.com/about/index.html"),
        ("https://example.com/about.html", True, "example.com/about.html"),
        ("https://example.com/page.php?id=3", True, "example.com/page.php/index.html"),
        ("https://example.com/css/site.css?v=2#x", False, "example.com/css/site.css"),
        ("https://example.com/api/", False, "example.com/api/index"),
        ("https://example.com/my%20file.pdf", False, "example.com/my file.pdf"),
        ("https://example.com/a/../b/c.js", False, "example.com/b/c.js"),
    ],
)
def test_local_path_for(url, is_html, expected):
    assert local_path_for(url, is_html) == expected


@pytest.mark.parametrize("url", ["https://example.com/", "https://example.com/docs/", "https://example.com/x.html"])
def test_local_path_maps_back_to_url(url):
    local = local_path_for(url, is_html=True)
    expected = url[: -len(".html")] if url.endswith(".html") else url
    assert reconstruct_url("https://example.com", local) == expected

"""Tests for deriving search phrases from product URLs."""

from app.url_query import extract_query_from_url


def test_slug_becomes_phrase():
    """The last path segment is the phrase, hyphens turned into spaces."""

    assert extract_query_from_url("https://store.com/products/blue-denim-jacket") == "blue denim jacket"


def test_underscores_and_case_are_kept_readable():
    """Underscores are separators too; case is left alone."""

    assert extract_query_from_url("https://store.com/en/Red_Wool-Scarf") == "Red Wool Scarf"


def test_products_segments_and_trailing_slash_are_skipped():
    assert extract_query_from_url("https://store.com/shop/products/linen-shirt/") == "linen shirt"
    assert extract_query_from_url("https://store.com/products/linen-shirt/products") == "linen shirt"


def test_query_string_and_fragment_are_ignored():
    assert extract_query_from_url("https://store.com/products/wide-leg-jeans?colour=blue#reviews") == "wide leg jeans"


def test_no_slug_falls_back_to_url():
    """Nothing but ``products`` in the path: the URL itself is the query."""

    url = "https://store.com/products/"
    assert extract_query_from_url(url) == url
    assert extract_query_from_url("https://store.com") == "https://store.com"


def test_invalid_url_is_returned_unchanged():
    assert extract_query_from_url("not a url") == "not a url"
    assert extract_query_from_url("http://[::1/broken") == "http://[::1/broken"

"""Turn a product page URL into a plain-text search phrase."""
from __future__ import annotations

import logging
import re
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

IGNORED_SEGMENTS = {"products"}
SLUG_SEPARATORS = re.compile(r"[-_]")


def extract_query_from_url(url: str) -> str:
    """Return the last meaningful path segment of ``url`` with ``-``/``_`` turned into spaces.

    ``https://store.com/products/blue-denim-jacket`` becomes ``blue denim jacket``.
    Case is preserved. A URL that cannot be parsed, or whose path has no usable
    segment, is returned unchanged so the caller always has something to search for.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        logger.debug("Could not parse %r as a URL; using it verbatim", url)
        return url
    if not parts.scheme:
        logger.debug("No scheme in %r; using it verbatim", url)
        return url

    segments = [seg for seg in parts.path.split("/") if seg and seg not in IGNORED_SEGMENTS]
    if not segments:
        return url
    return SLUG_SEPARATORS.sub(" ", segments[-1])

"""URL normalization helpers shared by the engine, cache, and provider clients."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

_SCHEME_WWW_PREFIX = re.compile(r"^(https?://)?(www\.)?")


def normalize_url(url: str) -> str:
    """Trim the URL and prefix ``https://`` when no http(s) scheme is present."""
    clean = str(url).strip()
    if not clean.startswith("http://") and not clean.startswith("https://"):
        clean = "https://" + clean
    return clean


def extract_domain(url: str) -> str:
    """Return the bare host of a URL, without scheme or leading ``www.``.

    Falls back to stripping the prefix textually when the URL cannot be parsed.
    """
    try:
        hostname = urlsplit(normalize_url(url)).hostname
    except ValueError:
        hostname = None

    if not hostname:
        return _SCHEME_WWW_PREFIX.sub("", str(url).strip())

    if hostname.startswith("www."):
        hostname = hostname[4:]
    return hostname

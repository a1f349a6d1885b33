"""Tests for URL normalization and domain extraction."""

from __future__ import annotations

import pytest

from eco_checker.core.urls import extract_domain, normalize_url


class TestNormalizeUrl:

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("example.com", "https://example.com"),
            ("  example.com/page  ", "https://example.com/page"),
            ("http://example.com", "http://example.com"),
            ("https://example.com", "https://example.com"),
            ("ftp.example.com", "https://ftp.example.com"),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_url(raw) == expected

    def test_idempotent(self):
        once = normalize_url(" Example.com ")
        assert normalize_url(once) == once


class TestExtractDomain:

    def test_strips_scheme_and_www(self):
        assert extract_domain("https://www.example.com/about?x=1") == "example.com"

    def test_bare_domain(self):
        assert extract_domain("example.org") == "example.org"

    def test_keeps_other_subdomains(self):
        assert extract_domain("http://blog.example.com") == "blog.example.com"

    def test_unparseable_falls_back_to_text(self):
        # Unbalanced IPv6 bracket makes urlsplit raise
        assert extract_domain("www.[bad") == "[bad"

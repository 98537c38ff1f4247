"""Tests for URL validation."""

import pytest
from mdbridge.security import UrlValidator, is_valid_url, normalize_url


class TestIsValidUrl:
    """Tests for the is_valid_url predicate."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com",
            "http://example.com/path?q=1#frag",
            "HTTPS://EXAMPLE.COM/",
            "https://example.com:8443/a/b",
            "http:example.com",
            "https:/example.com/a",
        ],
    )
    def test_accepts_absolute_http_urls(self, url):
        """Test that absolute http(s) URLs are accepted."""
        assert is_valid_url(url) is True

    @pytest.mark.parametrize(
        "url",
        [
            "/relative/path",
            "pic.png",
            "ftp://x.com",
            "mailto:someone@example.com",
            "not a url",
            "https://",
            "http://[::1",
            "https://example.com:port/",
            "https://exa mple.com/",
            "",
        ],
    )
    def test_rejects_everything_else(self, url):
        """Test that relative, non-http and malformed strings are rejected."""
        assert is_valid_url(url) is False

    def test_rejects_non_strings(self):
        """Test that None and other non-strings never raise."""
        assert is_valid_url(None) is False
        assert is_valid_url(42) is False


class TestUrlValidator:
    """Tests for UrlValidator."""

    def test_reports_rejection_reason(self):
        """Test that invalid URLs carry a reason."""
        validator = UrlValidator()

        result = validator.validate("ftp://example.com/file")

        assert result.is_valid is False
        assert "ftp" in result.rejection_reason

    def test_relative_url_reason(self):
        """Test the reason given for relative URLs."""
        validator = UrlValidator()

        assert validator.get_rejection_reason("/docs") == "URL is not absolute"
        assert validator.get_rejection_reason("https://example.com") is None

    def test_custom_schemes(self):
        """Test restricting the allowed schemes."""
        validator = UrlValidator(allowed_schemes={"https"})

        assert validator.is_valid("https://example.com")
        assert not validator.is_valid("http://example.com")


class TestNormalizeUrl:
    """Tests for normalize_url."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("http:example.com", "http://example.com"),
            ("https:/example.com/a", "https://example.com/a"),
            ("HTTP:example.com/x?y=1", "HTTP://example.com/x?y=1"),
            ("https://example.com", "https://example.com"),
            ("mailto:someone@example.com", "mailto:someone@example.com"),
            ("pic.png", "pic.png"),
        ],
    )
    def test_restores_missing_slashes(self, url, expected):
        """Test that only slash-less web URLs are rewritten."""
        assert normalize_url(url) == expected

    def test_scheme_without_host_stays_invalid(self):
        """Test that a bare scheme is still rejected after normalizing."""
        assert is_valid_url("http:") is False

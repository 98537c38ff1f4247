"""URL validation for references found in documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse


@dataclass
class UrlValidationResult:
    """Result of URL validation."""

    is_valid: bool
    rejection_reason: str | None = None

    @staticmethod
    def valid() -> UrlValidationResult:
        """Create a valid result."""
        return UrlValidationResult(is_valid=True)

    @staticmethod
    def invalid(reason: str) -> UrlValidationResult:
        """Create an invalid result with reason."""
        return UrlValidationResult(is_valid=False, rejection_reason=reason)


class UrlValidator:
    """
    Validates that a string is an absolute URL with an allowed scheme.

    Used as a guard before trusting document-supplied strings
    (base hrefs, image sources, link targets) as resolvable URLs.

    Example:
        validator = UrlValidator()
        result = validator.validate("ftp://example.com/file")
        if not result.is_valid:
            print(f"Rejected: {result.rejection_reason}")
    """

    DEFAULT_ALLOWED_SCHEMES = {"http", "https"}

    # Schemes that always carry an authority, so "http:host" means "http://host"
    AUTHORITY_SCHEMES = {"http", "https", "ws", "wss", "ftp"}

    def __init__(
        self,
        allowed_schemes: set[str] | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the URL validator.

        Args:
            allowed_schemes: Set of allowed URL schemes (default: {"http", "https"})
            logger: Optional logger for validation messages
        """
        self.allowed_schemes = allowed_schemes or self.DEFAULT_ALLOWED_SCHEMES
        self.logger = logger or logging.getLogger(__name__)

    def normalize(self, url: str) -> str:
        """
        Restore the missing slashes in ``http:host`` style URLs.

        Browsers read ``http:example.com`` and ``http:/example.com`` as
        ``http://example.com``. Other strings are returned unchanged.
        """
        scheme, sep, rest = url.partition(":")
        if sep and scheme.lower() in self.AUTHORITY_SCHEMES and not rest.startswith("//"):
            return f"{scheme}://{rest.lstrip('/')}"
        return url

    def validate(self, url: Any) -> UrlValidationResult:
        """
        Validate a URL.

        Args:
            url: The candidate value (non-strings are rejected)

        Returns:
            UrlValidationResult with is_valid and optional rejection_reason
        """
        if not isinstance(url, str) or not url:
            return UrlValidationResult.invalid("Empty or non-string URL")

        try:
            parsed = urlparse(self.normalize(url))
            # Accessing port validates the netloc (raises on "host:abc")
            parsed.port
        except ValueError:
            return UrlValidationResult.invalid("Invalid URL format")

        if not parsed.scheme:
            return UrlValidationResult.invalid("URL is not absolute")

        if parsed.scheme.lower() not in self.allowed_schemes:
            return UrlValidationResult.invalid(
                f"Scheme '{parsed.scheme}' not allowed (allowed: {sorted(self.allowed_schemes)})"
            )

        if not parsed.hostname:
            return UrlValidationResult.invalid("URL has no host")

        if any(ch.isspace() for ch in parsed.netloc):
            return UrlValidationResult.invalid("URL host contains whitespace")

        return UrlValidationResult.valid()

    def is_valid(self, url: Any) -> bool:
        """
        Quick check if URL is valid.

        Args:
            url: The URL to check

        Returns:
            True if valid, False otherwise
        """
        return self.validate(url).is_valid

    def get_rejection_reason(self, url: Any) -> str | None:
        """Get rejection reason for a URL, or None if it is valid."""
        return self.validate(url).rejection_reason


_default_validator = UrlValidator()


def is_valid_url(value: Any) -> bool:
    """Return True iff ``value`` is an absolute http or https URL."""
    return _default_validator.is_valid(value)


def normalize_url(value: str) -> str:
    """Return ``value`` with the slashes of ``http:host`` style URLs restored."""
    return _default_validator.normalize(value)

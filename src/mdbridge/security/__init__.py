"""URL validation for mdbridge."""

from .url_validator import UrlValidationResult, UrlValidator, is_valid_url, normalize_url

__all__ = ["UrlValidator", "UrlValidationResult", "is_valid_url", "normalize_url"]

"""Readable article extraction from HTML pages."""

import logging
from typing import Optional

from bs4 import BeautifulSoup
from readability import Document

logger = logging.getLogger(__name__)


class ArticleNotFoundError(ValueError):
    """Raised when a page has no readable article content."""


class ReadabilityExtractor:
    """
    Extracts the readable article from HTML documents.

    Uses readability-lxml to strip navigation, ads, and other boilerplate.
    When a document URL is given, relative links in the article are made
    absolute against it.

    Example:
        extractor = ReadabilityExtractor()
        content = extractor.extract(html, "https://example.com/post")
    """

    def __init__(
        self,
        min_text_length: int = 25,
        retry_length: int = 250,
        positive_keywords: Optional[list[str]] = None,
        negative_keywords: Optional[list[str]] = None,
    ):
        """
        Initialize the extractor.

        Args:
            min_text_length: Minimum paragraph length considered by the scorer
            retry_length: Article length below which extraction is retried less strictly
            positive_keywords: Class/id keywords that boost a candidate
            negative_keywords: Class/id keywords that penalise a candidate
        """
        self._min_text_length = min_text_length
        self._retry_length = retry_length
        self._positive_keywords = positive_keywords
        self._negative_keywords = negative_keywords

    def _has_content(self, html: str) -> bool:
        """Check whether extracted HTML carries any text or images."""
        soup = BeautifulSoup(html, "html.parser")
        return bool(soup.get_text(strip=True)) or soup.find("img") is not None

    def extract(self, html: str, url: Optional[str]) -> str:
        """
        Extract the readable article.

        Args:
            html: Raw HTML markup
            url: Document location for resolving relative links

        Returns:
            Article content as HTML

        Raises:
            ArticleNotFoundError: If the page has no article content
            readability.readability.Unparseable: If the document cannot be parsed
        """
        document = Document(
            html,
            url=url,
            min_text_length=self._min_text_length,
            retry_length=self._retry_length,
            positive_keywords=self._positive_keywords,
            negative_keywords=self._negative_keywords,
        )
        content = document.summary(html_partial=True)

        if not content or not self._has_content(content):
            raise ArticleNotFoundError(f"No readable content found for {url or 'document'}")

        logger.debug(f"Extracted {len(content)} bytes of article HTML from {url or 'document'}")
        return content

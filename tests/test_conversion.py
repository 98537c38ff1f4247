"""Tests for the conversion module."""

from unittest.mock import MagicMock, patch

import pytest
from mdbridge.conversion import ArticleNotFoundError, HtmlToMarkdown, ReadabilityExtractor
from mdbridge.models.config import MarkdownConfig

ARTICLE_TEXT = (
    "Widgets are small, reusable components that encapsulate behaviour, state, and "
    "presentation. In this article, we look at how widgets are composed, how they "
    "communicate with each other, and why keeping them small makes large applications "
    "easier to maintain, test, and reason about over time."
)

ARTICLE_PAGE = f"""<html><head><title>Widgets</title></head><body>
    <nav><a href="/home">Home</a> | <a href="/about">About</a></nav>
    <div class="content">
        <article>
            <h1>Understanding Widgets</h1>
            <p>{ARTICLE_TEXT}</p>
            <p>{ARTICLE_TEXT} Read the <a href="/docs/widgets">widget docs</a> for more, please.</p>
        </article>
    </div>
    <footer>Copyright, all rights reserved.</footer>
</body></html>"""


class TestReadabilityExtractor:
    """Tests for ReadabilityExtractor."""

    def test_extracts_article(self):
        """Test extraction of the main article text."""
        extractor = ReadabilityExtractor()

        result = extractor.extract(ARTICLE_PAGE, "https://example.com/blog/widgets")

        assert "Widgets are small, reusable components" in result

    def test_resolves_links_against_document_url(self):
        """Test that article links are made absolute."""
        extractor = ReadabilityExtractor()

        result = extractor.extract(ARTICLE_PAGE, "https://example.com/blog/widgets")

        assert "https://example.com/docs/widgets" in result

    def test_empty_article_raises(self):
        """Test that an article without content is an error."""
        extractor = ReadabilityExtractor()

        with patch("mdbridge.conversion.extractor.Document") as document:
            document.return_value.summary.return_value = "<div>  <p> </p></div>"

            with pytest.raises(ArticleNotFoundError):
                extractor.extract("<html></html>", "https://example.com")

    def test_image_only_article_is_content(self):
        """Test that images count as article content."""
        extractor = ReadabilityExtractor()

        with patch("mdbridge.conversion.extractor.Document") as document:
            document.return_value.summary.return_value = '<div><img src="a.png"></div>'

            result = extractor.extract("<html></html>", None)

        assert "a.png" in result
        document.assert_called_once()
        assert document.call_args.kwargs["url"] is None

    def test_page_without_content_raises(self):
        """Test that an empty page cannot be reduced to an article."""
        extractor = ReadabilityExtractor()

        with pytest.raises(ValueError):
            extractor.extract("<html><body></body></html>", "https://example.com")


class TestHtmlToMarkdown:
    """Tests for HtmlToMarkdown converter."""

    def test_converts_headings(self):
        """Test heading conversion."""
        converter = HtmlToMarkdown()

        result = converter.convert("<h1>Title</h1><h2>Subtitle</h2>")

        assert "# Title" in result
        assert "## Subtitle" in result

    def test_converts_bold_and_italic(self):
        """Test bold and italic conversion."""
        converter = HtmlToMarkdown()

        result = converter.convert("<p><strong>Bold</strong> and <em>italic</em> text.</p>")

        assert "**Bold**" in result
        assert "_italic_" in result or "*italic*" in result

    def test_resolves_image_against_base(self):
        """Test image URL resolution against the base element."""
        converter = HtmlToMarkdown()
        html = '<head><base href="https://example.com/dir/"></head><body><img src="pic.png"></body>'

        result = converter.convert(html)

        assert "![](https://example.com/dir/pic.png)" in result

    def test_uses_data_src_fallback(self):
        """Test lazy images without src."""
        converter = HtmlToMarkdown()
        html = '<base href="https://example.com/"><img data-src="fallback.png" alt="Fallback">'

        result = converter.convert(html)

        assert "![Fallback](https://example.com/fallback.png)" in result

    def test_resolves_link_against_base(self):
        """Test link URL resolution against the base element."""
        converter = HtmlToMarkdown()
        html = '<base href="https://example.com/"><p><a href="page.html">text</a></p>'

        result = converter.convert(html)

        assert "[text](https://example.com/page.html)" in result

    def test_only_first_base_is_used(self):
        """Test that later base elements are ignored."""
        converter = HtmlToMarkdown()
        html = (
            '<head><base href="https://example.com/a/"><base href="https://other.com/"></head>'
            '<body><p><a href="x.html">X</a></p></body>'
        )

        result = converter.convert(html)

        assert "https://example.com/a/x.html" in result
        assert "other.com" not in result

    def test_relative_links_kept_without_base(self):
        """Test that references stay relative when no base is present."""
        converter = HtmlToMarkdown()

        result = converter.convert('<p><a href="page.html">text</a></p>')

        assert "[text](page.html)" in result

    def test_encodes_spaces_in_resolved_references(self):
        """Test that links and images with spaces stay valid Markdown."""
        converter = HtmlToMarkdown()
        html = '<base href="https://example.com/"><p><a href="a b.html">t</a> <img src="my pic.png"></p>'

        result = converter.convert(html)

        assert "[t](https://example.com/a%20b.html)" in result
        assert "![](https://example.com/my%20pic.png)" in result

    def test_invalid_base_is_reported(self):
        """Test that an invalid base URL goes to the injected logger."""
        diagnostics = MagicMock()
        converter = HtmlToMarkdown(logger=diagnostics)

        result = converter.convert('<base href="javascript:void(0)"><p><a href="page.html">text</a></p>')

        diagnostics.error.assert_called_once_with("Invalid URL: javascript:void(0)")
        assert "[text](page.html)" in result

    def test_keeps_nested_formatting_in_links(self):
        """Test that inline formatting inside links survives."""
        converter = HtmlToMarkdown()

        result = converter.convert('<p><a href="https://example.com/p"><strong>Bold</strong> link</a></p>')

        assert "[**Bold** link](https://example.com/p)" in result

    def test_autolinks(self):
        """Test GFM autolinks when the text is the URL."""
        converter = HtmlToMarkdown()

        result = converter.convert('<p><a href="https://example.com">https://example.com</a></p>')

        assert "<https://example.com>" in result

    def test_strikethrough(self):
        """Test GFM strikethrough."""
        converter = HtmlToMarkdown()

        result = converter.convert("<p><del>gone</del> kept</p>")

        assert "~~gone~~" in result

    def test_tables(self):
        """Test GFM pipe tables."""
        converter = HtmlToMarkdown()
        html = "<table><tr><th>A</th><th>B</th></tr><tr><td>1</td><td>2</td></tr></table>"

        result = converter.convert(html)

        assert "A | B" in result
        assert "---" in result
        assert "1 | 2" in result

    def test_task_lists(self):
        """Test GFM task list markers."""
        converter = HtmlToMarkdown()
        html = (
            '<ul><li><input type="checkbox" checked disabled> Done</li>'
            '<li><input type="checkbox" disabled> Todo</li></ul>'
        )

        result = converter.convert(html)

        assert "[x] Done" in result
        assert "[ ] Todo" in result

    def test_fenced_code_blocks(self):
        """Test code blocks use fences."""
        converter = HtmlToMarkdown()

        result = converter.convert("<pre><code>def hello():\n    print('Hello')</code></pre>")

        assert "```" in result
        assert "def hello():" in result

    def test_ignore_images_option(self):
        """Test that images can be dropped via config."""
        converter = HtmlToMarkdown(MarkdownConfig(ignore_images=True))

        result = converter.convert('<p>Text <img src="https://example.com/a.png"></p>')

        assert "a.png" not in result
        assert "Text" in result

    def test_cleans_excessive_whitespace(self):
        """Test that excessive whitespace is cleaned."""
        converter = HtmlToMarkdown()

        result = converter.convert("<p>Text</p>\n\n\n\n\n<p>More text</p>")

        assert "\n\n\n" not in result
        assert result.endswith("More text\n")

    def test_empty_input(self):
        """Test that empty HTML gives empty Markdown."""
        assert HtmlToMarkdown().convert("") == ""

    def test_instances_do_not_share_base(self):
        """Test that resolver state is per conversion."""
        converter = HtmlToMarkdown()

        converter.convert('<base href="https://example.com/"><a href="a.html">A</a>')
        result = converter.convert('<p><a href="b.html">B</a></p>')

        assert "[B](b.html)" in result

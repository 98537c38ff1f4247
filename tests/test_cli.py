"""Tests for the command-line interface."""

import json
import logging

import pytest
from mdbridge.cli import create_parser, main


@pytest.fixture(autouse=True)
def restore_logger():
    """Undo the logging setup done by main()."""
    logger = logging.getLogger("mdbridge")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestParser:
    """Tests for argument parsing."""

    def test_html2md_arguments(self):
        """Test html2md options."""
        args = create_parser().parse_args(["html2md", "page.html", "--url", "https://example.com", "--readable"])

        assert args.command == "html2md"
        assert str(args.input) == "page.html"
        assert args.url == "https://example.com"
        assert args.readable is True

    def test_md2blocks_arguments(self):
        """Test md2blocks options."""
        args = create_parser().parse_args(["-v", "md2blocks", "--strict-images", "-o", "out.json"])

        assert args.command == "md2blocks"
        assert args.input is None
        assert args.strict_images is True
        assert args.verbose is True
        assert str(args.output) == "out.json"


class TestMain:
    """Tests for main()."""

    def test_html2md(self, tmp_path, capsys):
        """Test converting an HTML file to stdout."""
        page = tmp_path / "page.html"
        page.write_text(
            '<head><base href="https://example.com/dir/"></head><body><img src="pic.png"></body>',
            encoding="utf-8",
        )

        assert main(["html2md", str(page)]) == 0

        assert capsys.readouterr().out == "![](https://example.com/dir/pic.png)\n"

    def test_md2blocks_json(self, tmp_path, capsys):
        """Test Markdown to blocks JSON output."""
        doc = tmp_path / "doc.md"
        doc.write_text("# Title\n", encoding="utf-8")

        assert main(["md2blocks", str(doc)]) == 0

        blocks = json.loads(capsys.readouterr().out)
        assert blocks[0]["type"] == "heading_1"

    def test_output_file(self, tmp_path):
        """Test writing output to a file."""
        doc = tmp_path / "doc.md"
        doc.write_text("---\n", encoding="utf-8")
        out = tmp_path / "blocks.json"

        assert main(["md2blocks", str(doc), "-o", str(out)]) == 0

        assert json.loads(out.read_text(encoding="utf-8"))[0]["type"] == "divider"

    def test_strict_images_flag(self, tmp_path, capsys):
        """Test that --strict-images reaches the block converter."""
        doc = tmp_path / "doc.md"
        doc.write_text("![x](pic.png)\n", encoding="utf-8")

        assert main(["md2blocks", str(doc), "--strict-images"]) == 0

        assert json.loads(capsys.readouterr().out)[0]["type"] == "paragraph"

    def test_no_command(self, capsys):
        """Test that running without a command prints help."""
        assert main([]) == 1
        assert "usage:" in capsys.readouterr().err

    def test_bad_config(self, tmp_path):
        """Test that an invalid config file is reported."""
        config = tmp_path / "bad.yaml"
        config.write_text("unknown_key: 1\n", encoding="utf-8")
        doc = tmp_path / "doc.md"
        doc.write_text("text\n", encoding="utf-8")

        assert main(["--config", str(config), "md2blocks", str(doc)]) == 1

    def test_readable_failure(self, tmp_path, capsys):
        """Test that extraction failures exit with an error."""
        page = tmp_path / "empty.html"
        page.write_text("<html><body></body></html>", encoding="utf-8")

        assert main(["html2md", str(page), "--readable"]) == 1

        assert capsys.readouterr().out == ""

    def test_missing_input_file(self, tmp_path):
        """Test that a missing input file exits with an error."""
        assert main(["html2md", str(tmp_path / "missing.html")]) == 1

    def test_doctor(self):
        """Test running diagnostics."""
        assert main(["--doctor"]) == 0

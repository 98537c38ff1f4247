"""Command-line interface for mdbridge."""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from . import __version__
from .core.converter import html2markdown, markdown2blocks
from .logging_config import setup_logging
from .models.config import MdBridgeConfig


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="mdbridge",
        description="Convert HTML to Markdown and Markdown to editor blocks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a saved page, resolving links against its location
  mdbridge html2md page.html --url https://example.com/post

  # Keep only the readable article
  curl -s https://example.com/post | mdbridge html2md --url https://example.com/post --readable

  # Convert Markdown to Notion blocks (JSON)
  mdbridge md2blocks README.md -o blocks.json
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Run diagnostic checks",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML configuration file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log errors",
    )

    subparsers = parser.add_subparsers(dest="command")

    html_parser = subparsers.add_parser("html2md", help="Convert HTML to Markdown")
    html_parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="HTML file (default: stdin)",
    )
    html_parser.add_argument(
        "--url",
        "-u",
        default=None,
        help="Document URL used to resolve relative links",
    )
    html_parser.add_argument(
        "--readable",
        action="store_true",
        help="Extract the readable article before converting",
    )
    html_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file (default: stdout)",
    )

    blocks_parser = subparsers.add_parser("md2blocks", help="Convert Markdown to Notion blocks")
    blocks_parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="Markdown file (default: stdin)",
    )
    blocks_parser.add_argument(
        "--url",
        "-u",
        default=None,
        help="Source URL (recorded, not used by the conversion)",
    )
    blocks_parser.add_argument(
        "--strict-images",
        action="store_true",
        help="Only emit image blocks for absolute image URLs",
    )
    blocks_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file (default: stdout)",
    )

    return parser


def _read_input(path: Optional[Path]) -> str:
    if path is None:
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def _write_output(text: str, path: Optional[Path]) -> None:
    if path is None:
        sys.stdout.write(text)
        return
    path.write_text(text, encoding="utf-8")


def load_config(args: argparse.Namespace) -> MdBridgeConfig:
    """Build the configuration from the config file and CLI flags."""
    config = MdBridgeConfig.from_yaml_file(args.config) if args.config else MdBridgeConfig()

    if args.verbose:
        config = config.model_copy(update={"log_level": "DEBUG"})
    elif args.quiet:
        config = config.model_copy(update={"log_level": "ERROR"})

    if getattr(args, "strict_images", False):
        blocks = config.blocks.model_copy(update={"strict_image_urls": True})
        config = config.model_copy(update={"blocks": blocks})

    return config


def run_html2md(args: argparse.Namespace, config: MdBridgeConfig) -> int:
    """Run the HTML to Markdown conversion."""
    html = _read_input(args.input)
    markdown = html2markdown(
        {"url": args.url, "html": html, "readable": args.readable},
        config=config,
    )
    _write_output(markdown, args.output)
    return 0


def run_md2blocks(args: argparse.Namespace, config: MdBridgeConfig) -> int:
    """Run the Markdown to blocks conversion."""
    markdown = _read_input(args.input)
    blocks = markdown2blocks({"url": args.url, "markdown": markdown}, config=config)
    _write_output(json.dumps(blocks, indent=2, ensure_ascii=False) + "\n", args.output)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    console = Console(stderr=True)

    if args.doctor:
        from .doctor import run_doctor

        return run_doctor(console=console)

    if args.command is None:
        parser.print_help(sys.stderr)
        return 1

    try:
        config = load_config(args)
    except Exception as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        return 1

    setup_logging(
        level=config.log_level,
        log_file=str(config.log_file) if config.log_file else None,
        force=True,
    )

    commands = {
        "html2md": run_html2md,
        "md2blocks": run_md2blocks,
    }

    try:
        return commands[args.command](args, config)
    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""Command-line entry point: highlight a YARA file to stdout.

Usage:
    yara-highlight rules.yar --format ansi
    cat rules.yar | yara-highlight - --format html --css > rules.html
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import ThemeConfig
from .errors import ThemeNotFoundError
from .renderers import HtmlRenderer, get_renderer, list_renderers
from .scanner import YaraScanner

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yara-highlight",
        description="Syntax-highlight YARA rules",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default="-",
        help="YARA source file, or '-' for stdin (default: stdin)",
    )
    parser.add_argument(
        "--format",
        "-f",
        choices=list_renderers(),
        default="ansi",
        help="Output format (default: ansi)",
    )
    parser.add_argument(
        "--theme",
        default="default",
        help="Theme name from the user, project or bundled theme directories",
    )
    parser.add_argument(
        "--css",
        action="store_true",
        help="With --format html, prepend a <style> block for the theme",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log scan details to stderr",
    )
    return parser


def _read_source(name: str) -> str:
    if name == "-":
        return sys.stdin.read()
    return Path(name).read_text(encoding="utf-8", errors="replace")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        text = _read_source(args.file)
    except OSError as exc:
        print(f"error: cannot read {args.file}: {exc}", file=sys.stderr)
        return 1

    try:
        theme = ThemeConfig(args.theme)
    except ThemeNotFoundError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    logger.debug("using theme %r from %s", args.theme, theme.source)

    spans = YaraScanner().scan(text)
    renderer = get_renderer(args.format)(theme.get_styles())
    output = renderer.render(text, spans)

    if args.css and isinstance(renderer, HtmlRenderer):
        output = f"<style>\n{renderer.stylesheet()}</style>\n{output}"

    sys.stdout.write(output)
    if not output.endswith("\n"):
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""CLI command handlers for textvalue.

Each public ``handle_*`` function corresponds to a CLI subcommand and
encapsulates the wiring and output for that command.  Handlers receive
the parsed arguments and the active :class:`~textvalue.config.Settings`.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from textvalue.config import Settings
from textvalue.encoding import force_utf8, force_utf8_mapping
from textvalue.errors import ActionableError
from textvalue.slug import make_slug
from textvalue.text import TextValue


def _read_text(args: argparse.Namespace) -> str:
    """Return the positional ``text`` argument, or stdin when omitted.

    A single trailing newline on stdin is treated as a line terminator,
    not as part of the text.
    """
    if args.text is not None:
        return str(args.text)
    return sys.stdin.read().removesuffix("\n")


def handle_slug(args: argparse.Namespace, settings: Settings) -> None:
    """Print the URL slug for the input text."""
    print(make_slug(_read_text(args), reserved=settings.slug.reserved))


def handle_color(args: argparse.Namespace, settings: Settings) -> None:
    """Print the generated color as JSON, or as a hex string with ``--hex``."""
    color = TextValue(_read_text(args)).generate_color(
        as_hex=args.hex,
        max_intensity=settings.color.max_intensity,
    )
    if isinstance(color, str):
        print(color)
    else:
        print(json.dumps(color))


def handle_hashtags(args: argparse.Namespace, settings: Settings) -> None:
    """Print one hashtag per line, in order of appearance."""
    tags = TextValue(_read_text(args)).extract_hashtags(
        pad_for_search=args.pad,
        pad_length=settings.hashtags.pad_length,
        pad_char=settings.hashtags.pad_char,
    )
    for tag in tags:
        print(tag)


def handle_sanitize(args: argparse.Namespace, settings: Settings) -> None:
    """Print the text made safe for HTML."""
    value = TextValue(_read_text(args))
    value.sanitize(strip_tags=not args.keep_tags)
    print(value)


def handle_truncate(args: argparse.Namespace, settings: Settings) -> None:
    """Print the text cut to ``--length`` visible characters."""
    value = TextValue(_read_text(args))
    value.truncate(args.length)
    print(value)


def handle_strip_whitespace(args: argparse.Namespace, settings: Settings) -> None:
    """Print the text with spaces and control characters removed."""
    value = TextValue(_read_text(args))
    value.remove_whitespace()
    print(value)


def handle_utf8(args: argparse.Namespace, settings: Settings) -> None:
    """Read a file as raw bytes and print it normalized to UTF-8.

    With ``--json`` the repaired text is parsed as a JSON object and every
    key and string value is normalized before it is printed back out.
    """
    path = Path(args.path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ActionableError.input(str(path), str(exc)) from None

    text = force_utf8(
        raw,
        detect_order=settings.encoding.detect_order,
        fallback=settings.encoding.fallback,
    )
    if not args.json:
        sys.stdout.write(text)
        return

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ActionableError.parse(str(path), "JSON", str(exc)) from None
    if not isinstance(data, dict):
        raise ActionableError.validation(
            field_name=str(path),
            reason=f"top-level JSON value is {type(data).__name__}, expected an object",
        )
    normalized = force_utf8_mapping(
        data,
        detect_order=settings.encoding.detect_order,
        fallback=settings.encoding.fallback,
    )
    print(json.dumps(normalized, ensure_ascii=False, indent=2))


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="textvalue",
        description="Deterministic text transforms: slugs, colors, hashtags, sanitizing",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        metavar="PATH",
        help="Settings TOML file (default: built-in settings)",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        metavar="DIR",
        help="Also write a timestamped log file to DIR",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def _text_command(name: str, help_text: str) -> argparse.ArgumentParser:
        command_p = sub.add_parser(name, help=help_text)
        command_p.add_argument("text", nargs="?", default=None, help="Input text (default: stdin)")
        return command_p

    # -- slug ----------------------------------------------------------------
    _text_command("slug", "Print the URL slug for the text")

    # -- color ---------------------------------------------------------------
    color_p = _text_command("color", "Print the deterministic color for the text")
    color_p.add_argument("--hex", action="store_true", help="Print a hex string instead of JSON")

    # -- hashtags ------------------------------------------------------------
    hashtags_p = _text_command("hashtags", "List the hashtags in the text")
    hashtags_p.add_argument(
        "--pad",
        action="store_true",
        help="Pad short tags for full-text search",
    )

    # -- sanitize ------------------------------------------------------------
    sanitize_p = _text_command("sanitize", "Make the text safe for HTML")
    sanitize_p.add_argument(
        "--keep-tags",
        action="store_true",
        help="Encode markup as entities instead of stripping it",
    )

    # -- truncate ------------------------------------------------------------
    truncate_p = _text_command("truncate", "Cut the text to a display length")
    truncate_p.add_argument(
        "--length",
        type=int,
        required=True,
        metavar="N",
        help="Number of visible characters to keep",
    )

    # -- strip-whitespace ----------------------------------------------------
    _text_command("strip-whitespace", "Remove spaces and control characters")

    # -- utf8 ----------------------------------------------------------------
    utf8_p = sub.add_parser("utf8", help="Normalize a file of unknown encoding to UTF-8")
    utf8_p.add_argument("path", type=str, help="File to read as raw bytes")
    utf8_p.add_argument(
        "--json",
        action="store_true",
        help="Parse the file as a JSON object and normalize every key and string",
    )

    return parser


HANDLERS = {
    "slug": handle_slug,
    "color": handle_color,
    "hashtags": handle_hashtags,
    "sanitize": handle_sanitize,
    "truncate": handle_truncate,
    "strip-whitespace": handle_strip_whitespace,
    "utf8": handle_utf8,
}

"""CLI entry point for textvalue."""

from __future__ import annotations

import sys

from textvalue.cli import HANDLERS, build_parser
from textvalue.config import Settings, load_settings
from textvalue.errors import ActionableError
from textvalue.logging import configure_file_logging, logger


def _report(exc: ActionableError) -> None:
    print(f"Error: {exc.error}", file=sys.stderr)
    if exc.suggestion:
        print(f"  Suggestion: {exc.suggestion}", file=sys.stderr)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.log_dir:
        configure_file_logging(args.log_dir)

    try:
        settings = load_settings(args.config) if args.config else Settings()
        HANDLERS[args.command](args, settings)
    except ActionableError as exc:
        logger.debug("Command %s failed: %s", args.command, exc.to_dict())
        _report(exc)
        sys.exit(1)
    except Exception as exc:
        logger.debug("Command %s raised %s", args.command, type(exc).__name__, exc_info=True)
        source = getattr(args, "path", None) or args.command
        _report(ActionableError.from_exception(exc, source, args.command))
        sys.exit(1)


if __name__ == "__main__":
    main()

"""CLI tests — parser construction, command wiring, output formatting.

Covers :class:`TestParserConstruction`, :class:`TestTextCommands`,
:class:`TestUtf8Command`, and :class:`TestMainEntryPoint`.
"""

from __future__ import annotations

import io
import json
from typing import TYPE_CHECKING

import pytest

from textvalue.__main__ import main
from textvalue.cli import HANDLERS, build_parser, handle_slug, handle_utf8
from textvalue.config import Settings
from textvalue.errors import ActionableError, ErrorType

if TYPE_CHECKING:
    from pathlib import Path


class TestParserConstruction:
    """REQUIREMENT: The CLI parser defines every subcommand with its documented flags.

    WHO: The operator invoking the tool from the command line
    WHAT: All seven subcommands are registered; text is optional (stdin
          fallback); per-command flags default to off; truncate requires
          --length; a missing subcommand is a usage error
    WHY: A silently ignored flag produces plausible-looking wrong output
    """

    @pytest.mark.parametrize(
        "command",
        ["slug", "color", "hashtags", "sanitize", "strip-whitespace"],
    )
    def test_text_commands_accept_optional_text(self, command: str) -> None:
        """Each text command parses with and without a positional text."""
        parser = build_parser()

        assert parser.parse_args([command, "hello"]).text == "hello"
        assert parser.parse_args([command]).text is None

    def test_flags_default_to_false(self) -> None:
        """--hex, --pad and --keep-tags are off unless given."""
        parser = build_parser()

        assert parser.parse_args(["color", "x"]).hex is False
        assert parser.parse_args(["hashtags", "x"]).pad is False
        assert parser.parse_args(["sanitize", "x"]).keep_tags is False
        assert parser.parse_args(["color", "x", "--hex"]).hex is True

    def test_truncate_requires_integer_length(self) -> None:
        """truncate parses --length as int and rejects its absence."""
        parser = build_parser()

        assert parser.parse_args(["truncate", "x", "--length", "5"]).length == 5
        with pytest.raises(SystemExit):
            parser.parse_args(["truncate", "x"])

    def test_global_options_default_to_none(self) -> None:
        """--config and --log-dir are optional."""
        args = build_parser().parse_args(["slug", "x"])

        assert args.config is None
        assert args.log_dir is None

    def test_missing_subcommand_raises_system_exit(self) -> None:
        """Omitting the subcommand entirely produces a usage error."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestTextCommands:
    """REQUIREMENT: Each text command prints exactly the library's result.

    WHO: Shell scripts piping titles and names through the tool
    WHAT: slug, color, hashtags, sanitize, truncate and strip-whitespace
          print the transformed text on stdout; text falls back to stdin
    WHY: Scripts compare this output byte-for-byte with stored values
    """

    def test_slug_prints_slug(self, capsys: pytest.CaptureFixture[str]) -> None:
        """slug prints the URL token."""
        main(["slug", "Joe's CNN.com"])

        assert capsys.readouterr().out == "joes_cnn\n"

    def test_color_prints_json_mapping(self, capsys: pytest.CaptureFixture[str]) -> None:
        """color without --hex prints the channel mapping as JSON."""
        main(["color", "hello"])

        assert json.loads(capsys.readouterr().out) == {"r": 17, "g": 200, "b": 179}

    def test_color_hex_prints_hex_string(self, capsys: pytest.CaptureFixture[str]) -> None:
        """color --hex prints the unpadded hex string."""
        main(["color", "hello", "--hex"])

        assert capsys.readouterr().out == "11c8b3\n"

    def test_hashtags_prints_one_per_line(self, capsys: pytest.CaptureFixture[str]) -> None:
        """hashtags --pad prints each padded tag on its own line."""
        main(["hashtags", "Hi #ai and #Python", "--pad"])

        assert capsys.readouterr().out == "#ai---\n#python\n"

    def test_sanitize_strips_by_default(self, capsys: pytest.CaptureFixture[str]) -> None:
        """sanitize removes tags and escapes specials."""
        main(["sanitize", "<b>x</b> & y"])

        assert capsys.readouterr().out == "x &amp; y\n"

    def test_sanitize_keep_tags_encodes_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        """sanitize --keep-tags encodes markup instead of removing it."""
        main(["sanitize", "<b>x</b>", "--keep-tags"])

        assert capsys.readouterr().out == "&lt;b&gt;x&lt;/b&gt;\n"

    def test_truncate_prints_cut_text(self, capsys: pytest.CaptureFixture[str]) -> None:
        """truncate decodes entities then cuts with an ellipsis."""
        main(["truncate", "&amp;hello world", "--length", "5"])

        assert capsys.readouterr().out == "&hell...\n"

    def test_strip_whitespace_prints_compact_text(self, capsys: pytest.CaptureFixture[str]) -> None:
        """strip-whitespace removes spaces and tabs."""
        main(["strip-whitespace", "a b\tc"])

        assert capsys.readouterr().out == "abc\n"

    def test_text_is_read_from_stdin_when_omitted(
        self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without a positional text, stdin is used; the trailing newline is a separator."""
        monkeypatch.setattr("sys.stdin", io.StringIO("Hello World\n"))

        handle_slug(build_parser().parse_args(["slug"]), Settings())

        assert capsys.readouterr().out == "hello_world\n"


class TestUtf8Command:
    """REQUIREMENT: The utf8 command repairs files of unknown encoding.

    WHO: The operator cleaning up a legacy export
    WHAT: Raw bytes are printed as UTF-8 text; --json normalizes every key
          and string of a JSON object; unreadable files, invalid JSON and
          non-object JSON raise actionable errors
    WHY: Legacy exports mix Latin-1 and UTF-8 and cannot be loaded as-is
    """

    def test_latin1_file_is_printed_as_text(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A Latin-1 file is decoded via the fallback."""
        path = tmp_path / "legacy.txt"
        path.write_bytes(b"caf\xe9")

        main(["utf8", str(path)])

        assert capsys.readouterr().out == "café"

    def test_json_object_is_normalized(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """--json prints the normalized object."""
        path = tmp_path / "legacy.json"
        path.write_bytes(b'{"name": "caf\xe9", "n": 1, "tags": ["\xe9t\xe9"]}')

        main(["utf8", str(path), "--json"])

        assert json.loads(capsys.readouterr().out) == {"name": "café", "n": 1, "tags": ["été"]}

    def test_missing_file_raises_input_error(self, tmp_path: Path) -> None:
        """A path that does not exist raises INPUT."""
        args = build_parser().parse_args(["utf8", str(tmp_path / "missing.txt")])

        with pytest.raises(ActionableError) as exc_info:
            handle_utf8(args, Settings())

        assert exc_info.value.error_type == ErrorType.INPUT

    def test_invalid_json_raises_parse_error(self, tmp_path: Path) -> None:
        """Unparseable JSON raises PARSE."""
        path = tmp_path / "broken.json"
        path.write_bytes(b"{not json")
        args = build_parser().parse_args(["utf8", str(path), "--json"])

        with pytest.raises(ActionableError) as exc_info:
            handle_utf8(args, Settings())

        assert exc_info.value.error_type == ErrorType.PARSE

    def test_json_array_raises_validation_error(self, tmp_path: Path) -> None:
        """A top-level array is rejected because only objects have keys to normalize."""
        path = tmp_path / "list.json"
        path.write_bytes(b"[1, 2]")
        args = build_parser().parse_args(["utf8", str(path), "--json"])

        with pytest.raises(ActionableError) as exc_info:
            handle_utf8(args, Settings())

        assert exc_info.value.error_type == ErrorType.VALIDATION


@pytest.mark.usefixtures("restore_logger")
class TestMainEntryPoint:
    """REQUIREMENT: main() wires settings, logging and error reporting.

    WHO: The operator running ``python -m textvalue``
    WHAT: --config values reach the handlers; --log-dir writes a log file;
          actionable errors print the message and suggestion to stderr
          and exit with status 1
    WHY: A traceback tells the operator nothing about which file to fix
    """

    def test_config_file_settings_reach_handler(
        self, write_settings, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A custom reserved list from --config changes the slug."""
        path = write_settings('[slug]\nreserved = ["admin"]\n')

        main(["--config", str(path), "slug", "admin"])

        assert capsys.readouterr().out == "admin_1\n"

    def test_log_dir_creates_log_file(self, tmp_path: Path) -> None:
        """--log-dir adds a file handler writing into that directory."""
        log_dir = tmp_path / "logs"

        main(["--log-dir", str(log_dir), "slug", "x"])

        assert len(list(log_dir.glob("textvalue_*.log"))) == 1

    def test_actionable_error_exits_with_status_one(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A missing settings file prints the error and suggestion, then exits 1."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(tmp_path / "absent.toml"), "slug", "x"])

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Error: Configuration error" in err
        assert "Suggestion:" in err

    def test_unencodable_output_exits_with_status_one(
        self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """An ASCII-only stdout that cannot show the result reports a validation error."""
        monkeypatch.setattr("sys.stdout", io.TextIOWrapper(io.BytesIO(), encoding="ascii"))

        with pytest.raises(SystemExit) as exc_info:
            main(["strip-whitespace", "café au lait"])

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Validation error" in err, f"Got {err!r}"
        assert "PYTHONIOENCODING" in err

    def test_unknown_failure_is_reported_as_unexpected(
        self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Any other exception from a handler becomes an unexpected error, not a traceback."""

        def _boom(args, settings):
            raise RuntimeError("handler exploded")

        monkeypatch.setitem(HANDLERS, "slug", _boom)

        with pytest.raises(SystemExit) as exc_info:
            main(["slug", "x"])

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Unexpected error in slug during slug: handler exploded" in err, f"Got {err!r}"

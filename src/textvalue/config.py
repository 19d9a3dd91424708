"""Configuration loading and validation.

Loads ``settings.toml`` and validates every field up front, so a bad
codec name or an out-of-range intensity is reported once at startup
instead of surfacing as odd output later.

The validated config is exposed as a :class:`Settings` dataclass with
typed fields for each section: ``hashtags``, ``color``, ``slug`` and
``encoding``.  Every section is optional; ``Settings()`` holds the
built-in defaults.
"""

from __future__ import annotations

import codecs
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from textvalue.color import MAX_INTENSITY
from textvalue.encoding import DETECT_ORDER, FALLBACK_ENCODING
from textvalue.errors import ActionableError
from textvalue.logging import logger
from textvalue.slug import RESERVED_SLUGS
from textvalue.text import HASHTAG_PAD_CHAR, HASHTAG_PAD_LENGTH

# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass
class HashtagConfig:
    """Search padding from ``[hashtags]``."""

    pad_length: int = HASHTAG_PAD_LENGTH
    pad_char: str = HASHTAG_PAD_CHAR


@dataclass
class ColorConfig:
    """Color generation from ``[color]``."""

    max_intensity: int = MAX_INTENSITY


@dataclass
class SlugConfig:
    """Slug generation from ``[slug]``."""

    reserved: list[str] = field(default_factory=lambda: list(RESERVED_SLUGS))


@dataclass
class EncodingConfig:
    """UTF-8 normalization from ``[encoding]``."""

    detect_order: list[str] = field(default_factory=lambda: list(DETECT_ORDER))
    fallback: str = FALLBACK_ENCODING


@dataclass
class Settings:
    """Top-level validated configuration."""

    hashtags: HashtagConfig = field(default_factory=HashtagConfig)
    color: ColorConfig = field(default_factory=ColorConfig)
    slug: SlugConfig = field(default_factory=SlugConfig)
    encoding: EncodingConfig = field(default_factory=EncodingConfig)


# ---------------------------------------------------------------------------
# Default settings path
# ---------------------------------------------------------------------------

DEFAULT_SETTINGS_PATH = Path("config/settings.toml")


# ---------------------------------------------------------------------------
# Loading and validation
# ---------------------------------------------------------------------------


def load_settings(path: str | Path = DEFAULT_SETTINGS_PATH) -> Settings:
    """Load and validate settings from a TOML file.

    Raises :class:`~textvalue.errors.ActionableError`:
      - CONFIG if the file is missing
      - PARSE if the TOML is malformed
      - VALIDATION if a field has the wrong type or is out of range

    Returns a fully validated :class:`Settings` instance.
    """
    filepath = Path(path)
    if not filepath.exists():
        raise ActionableError.config(
            field_name="settings_path",
            reason=f"Settings file not found: {filepath}",
            suggestion=f"Create {filepath} or run without --config to use the defaults",
        )

    raw_text = filepath.read_text(encoding="utf-8")
    try:
        data = tomllib.loads(raw_text)
    except tomllib.TOMLDecodeError as exc:
        raise ActionableError.parse(
            source=str(filepath),
            fmt="TOML",
            raw_error=str(exc),
        ) from None

    settings = _validate(data)
    logger.info("Loaded settings from %s", filepath)
    return settings


def _validate(data: dict[str, object]) -> Settings:
    """Validate raw TOML data and return a Settings instance."""

    # -- hashtags section ----------------------------------------------------
    hashtags_data = _section(data, "hashtags")
    pad_length = hashtags_data.get("pad_length", HASHTAG_PAD_LENGTH)
    if not isinstance(pad_length, int) or isinstance(pad_length, bool) or pad_length < 1:
        raise ActionableError.validation(
            field_name="hashtags.pad_length",
            reason=f"is {pad_length!r} — must be an integer >= 1",
            suggestion="Set [hashtags].pad_length to a positive integer such as 6",
        )
    pad_char = hashtags_data.get("pad_char", HASHTAG_PAD_CHAR)
    if not isinstance(pad_char, str) or len(pad_char) != 1:
        raise ActionableError.validation(
            field_name="hashtags.pad_char",
            reason=f"is {pad_char!r} — must be exactly one character",
            suggestion='Set [hashtags].pad_char to a single character such as "-"',
        )

    # -- color section -------------------------------------------------------
    color_data = _section(data, "color")
    max_intensity = color_data.get("max_intensity", MAX_INTENSITY)
    if (
        not isinstance(max_intensity, int)
        or isinstance(max_intensity, bool)
        or not 0 <= max_intensity <= 255
    ):
        raise ActionableError.validation(
            field_name="color.max_intensity",
            reason=f"is {max_intensity!r} — must be an integer between 0 and 255",
            suggestion="Set [color].max_intensity to a value between 0 and 255",
        )

    # -- slug section --------------------------------------------------------
    slug_data = _section(data, "slug")
    reserved = slug_data.get("reserved", list(RESERVED_SLUGS))
    if not isinstance(reserved, list) or not all(isinstance(r, str) for r in reserved):
        raise ActionableError.validation(
            field_name="slug.reserved",
            reason="must be a list of strings",
            suggestion='Set [slug].reserved to a list such as ["me", "type"]',
        )

    # -- encoding section ----------------------------------------------------
    encoding_data = _section(data, "encoding")
    detect_order = encoding_data.get("detect_order", list(DETECT_ORDER))
    if not isinstance(detect_order, list) or not detect_order:
        raise ActionableError.validation(
            field_name="encoding.detect_order",
            reason="must be a non-empty list of codec names",
            suggestion='Set [encoding].detect_order to a list such as ["ascii", "utf-8"]',
        )
    for name in detect_order:
        _require_codec("encoding.detect_order", name)
    fallback = encoding_data.get("fallback", FALLBACK_ENCODING)
    _require_codec("encoding.fallback", fallback)

    return Settings(
        hashtags=HashtagConfig(pad_length=pad_length, pad_char=pad_char),
        color=ColorConfig(max_intensity=max_intensity),
        slug=SlugConfig(reserved=list(reserved)),
        encoding=EncodingConfig(detect_order=list(detect_order), fallback=fallback),
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _section(data: dict[str, object], name: str) -> dict[str, object]:
    """Return an optional top-level section, or raise VALIDATION if it is not a table."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ActionableError.validation(
            field_name=name,
            reason=f"[{name}] must be a table, not {type(section).__name__}",
            suggestion=f"Define [{name}] as a TOML table",
        )
    return section


def _require_codec(field_name: str, name: object) -> None:
    """Raise VALIDATION unless *name* is a codec Python knows."""
    if not isinstance(name, str):
        raise ActionableError.validation(
            field_name=field_name,
            reason=f"is {name!r} — must be a codec name string",
        )
    try:
        codecs.lookup(name)
    except LookupError:
        raise ActionableError.validation(
            field_name=field_name,
            reason=f"unknown encoding {name!r}",
            suggestion="Use a standard codec name such as 'utf-8', 'ascii' or 'latin-1'",
        ) from None

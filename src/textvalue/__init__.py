"""Deterministic text transforms: hashtags, sanitizing, truncation, colors, UTF-8, slugs."""

from textvalue.color import generate_color
from textvalue.encoding import force_utf8, force_utf8_mapping
from textvalue.slug import make_slug
from textvalue.text import TextValue

__all__ = ["TextValue", "force_utf8", "force_utf8_mapping", "generate_color", "make_slug"]

"""The :class:`TextValue` wrapper.

A ``TextValue`` owns one string, ``val``.  Mutating operations
(:meth:`~TextValue.sanitize`, :meth:`~TextValue.truncate`,
:meth:`~TextValue.remove_whitespace`) rewrite ``val`` in place and return
``None``; reading operations (:meth:`~TextValue.extract_hashtags`,
:meth:`~TextValue.generate_color`) leave it untouched.

No method raises for any input.
"""

from __future__ import annotations

import re

from textvalue import markup
from textvalue.color import MAX_INTENSITY, generate_color
from textvalue.logging import logger

HASHTAG_PAD_LENGTH = 6
HASHTAG_PAD_CHAR = "-"
ELLIPSIS = "..."

_HASHTAG_RE = re.compile(r"#[a-z0-9]+", re.IGNORECASE)

# Space plus every ASCII control character (tab, newlines, NUL, ...)
_WHITESPACE = (" ", *(chr(code) for code in range(32)))


def _coerce(value: object) -> str:
    if isinstance(value, TextValue):
        return value.val
    if isinstance(value, str):
        return value
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, (bytes, bytearray)):
        # Undecodable bytes survive as surrogate escapes
        return bytes(value).decode("utf-8", "surrogateescape")
    return str(value)


class TextValue:
    """A piece of plain text and the transformations that apply to it.

    Any value is accepted: ``None`` and ``False`` become ``""``, ``True``
    becomes ``"1"``, bytes are decoded as UTF-8 keeping invalid sequences
    as-is, and everything else goes through ``str()``.
    """

    __slots__ = ("val",)

    def __init__(self, value: object = "") -> None:
        self.val: str = _coerce(value)

    def __str__(self) -> str:
        return self.val

    def __repr__(self) -> str:
        return f"TextValue({self.val!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TextValue):
            return self.val == other.val
        return NotImplemented

    # -- reading -------------------------------------------------------------

    def extract_hashtags(
        self,
        pad_for_search: bool = False,
        *,
        pad_length: int = HASHTAG_PAD_LENGTH,
        pad_char: str = HASHTAG_PAD_CHAR,
    ) -> list[str]:
        """Return every ``#tag`` in order of appearance, lowercased.

        Duplicates are kept.  With *pad_for_search*, tags shorter than
        *pad_length* are right-padded with *pad_char* so they clear a
        full-text index's minimum token length.

        >>> TextValue("Hello #World #ai").extract_hashtags(pad_for_search=True)
        ['#world', '#ai---']
        """
        tags = [tag.lower() for tag in _HASHTAG_RE.findall(self.val)]
        if pad_for_search:
            return [tag.ljust(pad_length, pad_char) for tag in tags]
        return tags

    def generate_color(
        self,
        as_hex: bool = False,
        *,
        max_intensity: int = MAX_INTENSITY,
    ) -> dict[str, int] | str:
        """Deterministic background color for this text.

        See :func:`textvalue.color.generate_color`.
        """
        return generate_color(self.val, as_hex=as_hex, max_intensity=max_intensity)

    # -- mutating ------------------------------------------------------------

    def sanitize(self, strip_tags: bool = True) -> None:
        """Make the text safe to embed in HTML.

        Numeric text is left untouched.  With *strip_tags*, markup is
        removed and ``& " ' < >`` are escaped; otherwise markup is kept
        but every character with a named HTML entity is encoded.
        Existing entity references are never double-encoded, so calling
        this twice is the same as calling it once.
        """
        if markup.is_numeric(self.val):
            return
        if strip_tags:
            self.val = markup.escape_special_chars(markup.strip_tags(self.val))
        else:
            self.val = markup.encode_entities(self.val)

    def truncate(self, length: int) -> None:
        """Cut the text to *length* visible characters.

        Entities are decoded first, always, so ``&amp;`` counts as one
        character.  Text longer than *length* keeps its first *length*
        characters followed by ``...``; a non-positive *length* keeps
        none of them.
        """
        self.val = markup.decode_entities(self.val)
        if len(self.val) > length:
            logger.debug("Truncating %d chars to %d", len(self.val), length)
            self.val = self.val[: max(length, 0)] + ELLIPSIS

    def remove_whitespace(self) -> None:
        """Delete spaces and all ASCII control characters."""
        for needle in _WHITESPACE:
            self.val = self.val.replace(needle, "")

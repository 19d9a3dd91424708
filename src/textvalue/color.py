"""Deterministic avatar colors derived from text content.

The same text always maps to the same color on every platform: the seed
is the zlib CRC-32 of the text's bytes and all rounding is done in exact
decimal arithmetic.

Derivation for ``"hello"`` (CRC-32 ``907060870``)::

    digits      "907060870"      first 9 decimal digits, '5'-padded
    interleave  "908" "067" "700" -> "908067700"
    g, r, b     908, 67, 700     three 3-digit groups
    scaled      200, 17, 179     round(n / 1000 * 255), capped at 200
    hex         "11c8b3"         r, g, b without zero-padding
"""

from __future__ import annotations

import zlib
from decimal import ROUND_HALF_UP, Decimal

MAX_INTENSITY = 200

_DIGITS = 9
_DIGIT_FILL = "5"


def checksum_digits(data: bytes) -> str:
    """Return the 9-character decimal seed for *data*.

    The unsigned CRC-32 is rendered in base 10, cut to its first nine
    characters, and right-padded with ``'5'`` when shorter.
    """
    return str(zlib.crc32(data))[:_DIGITS].ljust(_DIGITS, _DIGIT_FILL)


def interleave(digits: str) -> str:
    """Regroup ``c0..c8`` as ``c0c3c6 + c1c4c7 + c2c5c8``."""
    return digits[0::3] + digits[1::3] + digits[2::3]


def scale_component(component: int, max_intensity: int = MAX_INTENSITY) -> int:
    """Map a 0-999 component onto a 0-255 channel, capped at *max_intensity*."""
    channel = int(
        (Decimal(component) * 255 / 1000).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    )
    return min(channel, max_intensity)


def generate_color(
    text: str | bytes,
    *,
    as_hex: bool = False,
    max_intensity: int = MAX_INTENSITY,
) -> dict[str, int] | str:
    """Derive a background color from *text*.

    Args:
        text: Source text.  ``str`` is hashed as UTF-8; lone surrogate
            escapes map back to the raw bytes they stand for.
        as_hex: Return ``hex(r) + hex(g) + hex(b)`` (lowercase, no
            zero-padding, no separators) instead of a mapping.
        max_intensity: Upper bound for every channel.

    Returns:
        ``{"r": r, "g": g, "b": b}`` or the hex string.
    """
    data = text if isinstance(text, bytes) else text.encode("utf-8", "surrogateescape")
    colors = interleave(checksum_digits(data))

    rgb = {
        "r": scale_component(int(colors[3:6]), max_intensity),
        "g": scale_component(int(colors[0:3]), max_intensity),
        "b": scale_component(int(colors[6:9]), max_intensity),
    }

    if as_hex:
        return f"{rgb['r']:x}{rgb['g']:x}{rgb['b']:x}"
    return rgb

"""UTF-8 normalization for text of questionable encoding.

:func:`force_utf8` turns ``bytes`` (or a ``str`` still carrying
``surrogateescape`` residue of undecodable bytes) into clean Unicode,
trying a prioritized list of candidate encodings before falling back to
Latin-1.  :func:`force_utf8_mapping` applies the same repair to every
key and string value of a nested structure.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from textvalue.logging import logger

DETECT_ORDER: tuple[str, ...] = ("ascii", "utf-8")
FALLBACK_ENCODING = "latin-1"


def detect_encoding(data: bytes, detect_order: tuple[str, ...] | list[str] = DETECT_ORDER) -> str | None:
    """Return the first candidate that strictly decodes *data*, or ``None``."""
    for encoding in detect_order:
        try:
            data.decode(encoding)
        except UnicodeDecodeError:
            continue
        return encoding
    return None


def force_utf8(
    s: str | bytes | bytearray,
    *,
    detect_order: tuple[str, ...] | list[str] = DETECT_ORDER,
    fallback: str = FALLBACK_ENCODING,
) -> str:
    """Return *s* as clean Unicode text.

    Clean ``str`` input is returned unchanged.  ``bytes`` are decoded with
    the first encoding in *detect_order* that accepts them, otherwise
    with *fallback*.  Never raises for undecodable input.
    """
    if isinstance(s, str):
        if _is_utf8_encodable(s):
            return s
        try:
            data = s.encode("utf-8", "surrogateescape")
        except UnicodeEncodeError:
            # Lone surrogates outside the escape range have no byte form
            logger.debug("Replacing unpaired surrogates in %d-char string", len(s))
            return s.encode("utf-8", "replace").decode("utf-8")
    else:
        data = bytes(s)

    encoding = detect_encoding(data, detect_order)
    if encoding is None:
        logger.debug(
            "No candidate in %s decodes %d bytes — falling back to %s",
            list(detect_order),
            len(data),
            fallback,
        )
        return data.decode(fallback, "replace")
    return data.decode(encoding)


def force_utf8_mapping(
    data: Mapping[Any, Any],
    *,
    detect_order: tuple[str, ...] | list[str] = DETECT_ORDER,
    fallback: str = FALLBACK_ENCODING,
) -> dict[Any, Any]:
    """Return a new dict with every key and string value run through :func:`force_utf8`.

    Nested mappings become new dicts; lists and tuples are rebuilt with
    their original type; every other value is passed through as the same
    object.  Keys that collide after normalization keep the value seen
    last in iteration order.
    """
    result: dict[Any, Any] = {}
    for key, value in data.items():
        if isinstance(key, (str, bytes)):
            key = force_utf8(key, detect_order=detect_order, fallback=fallback)
        result[key] = _normalize(value, detect_order, fallback)
    return result


def _normalize(value: Any, detect_order: tuple[str, ...] | list[str], fallback: str) -> Any:
    if isinstance(value, Mapping):
        return force_utf8_mapping(value, detect_order=detect_order, fallback=fallback)
    if isinstance(value, (str, bytes, bytearray)):
        return force_utf8(value, detect_order=detect_order, fallback=fallback)
    if isinstance(value, list):
        return [_normalize(item, detect_order, fallback) for item in value]
    if isinstance(value, tuple):
        return tuple(_normalize(item, detect_order, fallback) for item in value)
    return value


def _is_utf8_encodable(s: str) -> bool:
    try:
        s.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True

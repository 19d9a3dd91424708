"""HTML helpers behind :meth:`TextValue.sanitize` and :meth:`TextValue.truncate`.

Pure functions with no domain dependencies.  Every escaping helper here
leaves an already-valid entity reference (``&amp;``, ``&#039;``,
``&#x27;``) alone, so running one twice gives the same result as
running it once.
"""

from __future__ import annotations

import html
import re
from html.entities import codepoint2name, html5
from html.parser import HTMLParser

# Integer or decimal with optional sign, exponent, and surrounding whitespace
_NUMERIC_RE = re.compile(
    r"[ \t\n\r\v\f]*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?[ \t\n\r\v\f]*"
)

# A semicolon-terminated character reference, named or numeric
_ENTITY_RE = re.compile(r"&(?:#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")

# Where a tag, comment or declaration would begin
_TAG_OPEN_RE = re.compile(r"<[A-Za-z/!?]")

_SPECIAL_CHARS = {
    '"': "&quot;",
    "'": "&#039;",
    "<": "&lt;",
    ">": "&gt;",
}

# HTML 4.01 named entities; double quotes are left as-is in this mode
_NAMED_ENTITIES = {
    chr(codepoint): f"&{name};"
    for codepoint, name in codepoint2name.items()
    if codepoint not in (ord("&"), ord('"'))
}


def is_numeric(text: str) -> bool:
    """Return ``True`` when *text* is a plain decimal number literal.

    Accepts ``"42"``, ``"-3.5"``, ``" 1e10 "``, ``".5"``.  Rejects
    ``"nan"``, ``"inf"``, ``"0x1A"`` and digit-grouped ``"1_000"``.
    """
    return _NUMERIC_RE.fullmatch(text) is not None


# ---------------------------------------------------------------------------
# Tag stripping
# ---------------------------------------------------------------------------


class _TagStripper(HTMLParser):
    """Collect only the character data of a document.

    The input is fed with every ``&`` pre-escaped to ``&amp;`` so the
    parser's own charref conversion restores the text byte-for-byte
    instead of decoding the caller's entities.

    ``<script>``, ``<style>``, ``<title>`` and ``<textarea>`` get no raw-text
    mode: their tags are dropped like any other, and their bodies are kept
    as ordinary text even when the closing tag never comes.
    """

    CDATA_CONTENT_ELEMENTS = ()
    RCDATA_CONTENT_ELEMENTS = ()

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self._parts: list[str] = []

    def handle_data(self, data: str) -> None:
        self._parts.append(data)

    def get_text(self) -> str:
        return "".join(self._parts)


def strip_tags(text: str) -> str:
    """Remove markup tags, comments, and declarations from *text*.

    Character data and entity references are kept exactly as written.
    A tag left open at the end of the input (``"x<y"``) is dropped along
    with everything after it; a ``<`` that cannot start a tag
    (``"a < b"``) is ordinary text.

    >>> strip_tags("<p>Tom &amp; <b>Jerry</b></p><!-- x -->")
    'Tom &amp; Jerry'
    >>> strip_tags("x<y")
    'x'
    """
    unterminated = _TAG_OPEN_RE.search(text, text.rfind(">") + 1)
    if unterminated is not None:
        text = text[: unterminated.start()]

    stripper = _TagStripper()
    stripper.feed(text.replace("&", "&amp;"))
    stripper.close()
    return stripper.get_text()


# ---------------------------------------------------------------------------
# Escaping
# ---------------------------------------------------------------------------


def _escape_segments(text: str, table: dict[str, str]) -> str:
    """Escape *text* through *table*, leaving existing entity references intact."""
    out: list[str] = []
    pos = 0
    for match in _ENTITY_RE.finditer(text):
        if not _is_known_entity(match.group(0)):
            continue
        out.append(_escape_plain(text[pos : match.start()], table))
        out.append(match.group(0))
        pos = match.end()
    out.append(_escape_plain(text[pos:], table))
    return "".join(out)


def _escape_plain(text: str, table: dict[str, str]) -> str:
    text = text.replace("&", "&amp;")
    return "".join(table.get(ch, ch) for ch in text)


def _is_known_entity(ref: str) -> bool:
    if ref.startswith("&#"):
        return True
    return ref[1:] in html5


def escape_special_chars(text: str) -> str:
    """Escape ``& " ' < >`` without double-encoding existing entities.

    >>> escape_special_chars("a < b & 'c' &amp; d")
    'a &lt; b &amp; &#039;c&#039; &amp; d'
    """
    return _escape_segments(text, _SPECIAL_CHARS)


def encode_entities(text: str) -> str:
    """Convert every character that has an HTML 4.01 named entity.

    Markup survives as escaped text (``<b>`` becomes ``&lt;b&gt;``),
    accented letters become ``&eacute;`` and friends.  Double quotes are
    not converted.
    """
    return _escape_segments(text, _NAMED_ENTITIES)


def decode_entities(text: str) -> str:
    """Decode the semicolon-terminated character references in *text*.

    Bare ampersands and references without a closing ``;`` (``&amp ``,
    ``&copy2020``) are left exactly as written, as are unknown names.

    >>> decode_entities("&lt;b&gt; &amp Tom &copy2020 &bogus;")
    '<b> &amp Tom &copy2020 &bogus;'
    """
    return _ENTITY_RE.sub(_decode_reference, text)


def _decode_reference(match: re.Match[str]) -> str:
    ref = match.group(0)
    if not _is_known_entity(ref):
        return ref
    return html.unescape(ref)

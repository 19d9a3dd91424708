"""URL-safe slug generation.

Pure functions with no domain dependencies — safe to import from any
layer.
"""

from __future__ import annotations

import re

RESERVED_SLUGS: tuple[str, ...] = ("me", "type")
RESERVED_SUFFIX = "_1"

# Only ".net " needs the trailing space; existing slugs depend on it
_TLD_RE = re.compile(r"\.com|\.org|\.net ", re.IGNORECASE)
_QUOTES_RE = re.compile(r"['\".]+")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+", re.IGNORECASE)


def make_slug(text: str, *, reserved: tuple[str, ...] | list[str] = RESERVED_SLUGS) -> str:
    """Convert *text* to a lowercase, underscore-delimited URL token.

    Steps, in order:
      1. An exact reserved route segment gets ``_1`` appended.
      2. ``.com``, ``.org`` and ``.net `` are dropped, so ``CNN.com``
         does not become ``cnn_com``.
      3. Quotes and periods are dropped, so ``Joe's`` becomes ``joes``.
      4. Runs of anything but letters a-z (matched case-insensitively, so
         the Kelvin sign U+212A counts as ``k``) and digits collapse
         to ``_``.
      5. The result is lowercased and stripped of edge underscores.

    >>> make_slug("Joe's CNN.com")
    'joes_cnn'
    >>> make_slug("me")
    'me_1'
    >>> make_slug("!!!")
    ''
    """
    if text in reserved:
        text += RESERVED_SUFFIX

    slug = _TLD_RE.sub("", text)
    slug = _QUOTES_RE.sub("", slug)
    slug = _NON_ALNUM_RE.sub("_", slug)
    return slug.lower().strip("_")

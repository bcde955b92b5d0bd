"""Display-width measurement for text placed on the character grid.

Element geometry is measured in terminal columns, not code points: wide
CJK glyphs occupy two cells, combining marks none, and SGR escapes never
contribute to the width of a line.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

# SGR / cursor CSI sequences and OSC 8 hyperlinks
_STRIP_RE = re.compile(
    r"\x1b\[[0-9;]*[mGKHJ]"
    r"|\x1b\]8;;[^\x07]*\x07"
)

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


def strip_ansi(text: str) -> str:
    """Remove SGR, cursor and hyperlink escape sequences from *text*."""
    return _STRIP_RE.sub("", text)


def _grapheme_width(g: str) -> int:
    """Return the number of cells a single grapheme cluster occupies.

    Control characters and lone combining marks take no cells. Emoji
    clusters (VS16, ZWJ sequences, skin tones, flags) take two. Everything
    else is measured by ``wcwidth`` on its base code point.
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    base = g[0]
    if ord(base) >= 0x1F000 or 0x2600 <= ord(base) <= 0x27BF:
        return 2

    category = unicodedata.category(base)
    if category.startswith("M") or category == "Cf":
        return 0

    return max(_wcwidth.wcwidth(base), 0)


def visible_width(text: str) -> int:
    """Return the number of terminal columns *text* occupies.

    Escape sequences are ignored. Pure printable ASCII is measured by
    length; anything else is segmented into grapheme clusters and the
    result cached.
    """
    if not text:
        return 0

    stripped = strip_ansi(text)
    if not stripped:
        return 0

    if all(0x20 <= ord(ch) <= 0x7E for ch in stripped):
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))
    return _cache_width(stripped, total)

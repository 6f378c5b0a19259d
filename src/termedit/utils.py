"""Display-width helpers for status and message text.

Document rows are drawn byte-for-byte, but the status bar and message line
carry text (file names, messages) that may contain wide or combining
characters.  These helpers measure and cut such text by terminal columns.
"""

from __future__ import annotations

import grapheme
import wcwidth as _wcwidth

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _grapheme_width(g: str) -> int:
    """Terminal columns taken by one grapheme cluster."""
    w = _wcwidth.wcswidth(g)
    if w >= 0:
        return w
    # Control characters and other unprintables: measure what can be measured
    return max(0, sum(max(_wcwidth.wcwidth(ch), 0) for ch in g))


def visible_width(text: str) -> int:
    """Return the number of terminal columns *text* occupies."""
    if not text:
        return 0
    if text.isascii() and text.isprintable():
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(text))
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[text] = total
    return total


def truncate_to_width(text: str, max_width: int) -> str:
    """Return the longest prefix of *text* that fits in *max_width* columns.

    Cuts on grapheme boundaries, so a wide character that would straddle the
    limit is dropped entirely.
    """
    if max_width <= 0:
        return ""
    if visible_width(text) <= max_width:
        return text

    out: list[str] = []
    cols = 0
    for g in grapheme.graphemes(text):
        w = _grapheme_width(g)
        if cols + w > max_width:
            break
        out.append(g)
        cols += w
    return "".join(out)


def display_text(text: str) -> str:
    """Make *text* safe to encode as UTF-8 for the screen.

    File names that are not valid UTF-8 arrive with surrogate escapes; their
    undecodable bytes are shown as U+FFFD.
    """
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")

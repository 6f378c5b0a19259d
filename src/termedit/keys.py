"""Logical key alphabet produced by the key decoder.

A key event is either an ``int`` (a raw byte: printable characters and
control codes alike) or one of the named-key strings on :class:`Key`.
"""

from __future__ import annotations

from typing import Union

KeyEvent = Union[int, str]

ESC = 0x1B


class Key:
    """Named keys that have no single-byte encoding."""

    escape = "escape"
    up = "up"
    down = "down"
    left = "left"
    right = "right"
    home = "home"
    end = "end"
    delete = "delete"
    page_up = "pageUp"
    page_down = "pageDown"


ARROW_KEYS: frozenset[str] = frozenset({Key.up, Key.down, Key.left, Key.right})


def ctrl_key(key: str) -> int:
    """Return the control code a terminal sends for Ctrl+*key*."""
    return ord(key) & 0x1F

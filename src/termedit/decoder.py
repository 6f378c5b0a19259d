"""Escape-sequence decoding.

Turns a byte-at-a-time input source into logical key events.  The decoder is
an explicit state machine: :func:`step` is a pure transition function over
the states below, and :class:`KeyDecoder` drives it against a
:class:`ByteSource`.

A read that times out (``None``) while an escape sequence is pending resolves
to a literal :attr:`Key.escape`, so a lone Esc keypress never stalls the
editor.  Sequences that match nothing known also degrade to
:attr:`Key.escape`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Protocol, Union

from termedit.keys import ESC, Key, KeyEvent

logger = logging.getLogger(__name__)


class ByteSource(Protocol):
    """Anything that yields one input byte per call.

    Returns ``None`` when no byte arrived within the source's read timeout.
    """

    def read_byte(self) -> int | None: ...


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Normal:
    pass


@dataclass(frozen=True)
class SawEscape:
    pass


@dataclass(frozen=True)
class SawEscapeO:
    """``ESC O`` (SS3) seen; one more byte decides Home/End."""


@dataclass(frozen=True)
class SawEscapeBracket:
    """``ESC [`` (CSI) seen."""


@dataclass(frozen=True)
class SawEscapeBracketDigit:
    """``ESC [ <digit>`` seen; waiting for the ``~`` terminator."""

    digit: str


DecoderState = Union[Normal, SawEscape, SawEscapeO, SawEscapeBracket, SawEscapeBracketDigit]


# ---------------------------------------------------------------------------
# Sequence tables
# ---------------------------------------------------------------------------

# ESC [ <letter>
CSI_LETTER_KEYS: dict[str, str] = {
    "A": Key.up,
    "B": Key.down,
    "C": Key.right,
    "D": Key.left,
    "H": Key.home,
    "F": Key.end,
}

# ESC [ <digit> ~
CSI_TILDE_KEYS: dict[str, str] = {
    "1": Key.home,
    "3": Key.delete,
    "4": Key.end,
    "5": Key.page_up,
    "6": Key.page_down,
    "7": Key.home,
    "8": Key.end,
}

# ESC O <letter>
SS3_KEYS: dict[str, str] = {
    "H": Key.home,
    "F": Key.end,
}


def _char(byte: int | None) -> str | None:
    return None if byte is None else chr(byte)


def step(state: DecoderState, byte: int | None) -> tuple[DecoderState, KeyEvent | None]:
    """Advance the decoder by one read.

    *byte* is ``None`` when the read timed out.  Returns the next state and
    the key event completed by this read, if any.
    """
    ch = _char(byte)
    match state:
        case Normal():
            if byte is None:
                return Normal(), None
            if byte == ESC:
                return SawEscape(), None
            return Normal(), byte

        case SawEscape():
            if ch == "[":
                return SawEscapeBracket(), None
            if ch == "O":
                return SawEscapeO(), None
            return Normal(), Key.escape

        case SawEscapeO():
            return Normal(), SS3_KEYS.get(ch, Key.escape)

        case SawEscapeBracket():
            if ch is not None and "1" <= ch <= "9":
                return SawEscapeBracketDigit(ch), None
            return Normal(), CSI_LETTER_KEYS.get(ch, Key.escape)

        case SawEscapeBracketDigit(digit=digit):
            if ch == "~":
                return Normal(), CSI_TILDE_KEYS.get(digit, Key.escape)
            return Normal(), Key.escape

    raise TypeError(f"unknown decoder state: {state!r}")


# ---------------------------------------------------------------------------
# KeyDecoder
# ---------------------------------------------------------------------------


class KeyDecoder:
    """Iterator of key events read from *source*.

    Iteration never ends on its own; it only stops if the source raises.
    """

    def __init__(self, source: ByteSource) -> None:
        self._source = source

    def __iter__(self) -> Iterator[KeyEvent]:
        return self

    def __next__(self) -> KeyEvent:
        return self.read_key()

    def read_key(self) -> KeyEvent:
        """Block until one complete key event has been decoded."""
        state: DecoderState = Normal()
        seen: list[int | None] = []
        while True:
            byte = self._source.read_byte()
            if not isinstance(state, Normal) or byte is not None:
                seen.append(byte)
            state, event = step(state, byte)
            if event is None:
                continue
            if event == Key.escape and len(seen) > 1 and seen[-1] is not None:
                logger.debug("Unrecognized escape sequence %r", seen)
            return event

"""Row storage and tab-expansion rendering.

A :class:`Row` keeps the raw bytes of one line (``chars``) together with a
derived ``render`` form in which every tab is expanded to spaces up to the
next tab stop.  :class:`RowStore` owns the ordered rows of the document and
maps byte offsets (``cx``) to rendered columns (``rx``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from termedit.config import DEFAULT_TAB_STOP

TAB = 0x09
SPACE = 0x20


# ---------------------------------------------------------------------------
# Pure tab-expansion helpers
# ---------------------------------------------------------------------------


def expand_tabs(chars: bytes | bytearray, tab_stop: int = DEFAULT_TAB_STOP) -> bytes:
    """Return *chars* with each tab replaced by spaces up to the next tab stop.

    A tab always emits at least one space, so a tab sitting exactly on a stop
    advances a full ``tab_stop`` columns.
    """
    if TAB not in chars:
        return bytes(chars)

    out = bytearray()
    for c in chars:
        if c == TAB:
            out.append(SPACE)
            while len(out) % tab_stop != 0:
                out.append(SPACE)
        else:
            out.append(c)
    return bytes(out)


def cx_to_rx(chars: bytes | bytearray, cx: int, tab_stop: int = DEFAULT_TAB_STOP) -> int:
    """Map byte offset *cx* to its rendered column."""
    rx = 0
    for c in chars[:cx]:
        if c == TAB:
            rx += (tab_stop - 1) - (rx % tab_stop)
        rx += 1
    return rx


# ---------------------------------------------------------------------------
# Row
# ---------------------------------------------------------------------------


@dataclass
class Row:
    """One logical line: raw bytes plus the tab-expanded render form."""

    chars: bytearray = field(default_factory=bytearray)
    render: bytes = b""

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)


# ---------------------------------------------------------------------------
# RowStore
# ---------------------------------------------------------------------------


class RowStore:
    """Ordered rows of the document.

    Rows are identified only by their index.  Nothing in the editor removes
    or reorders rows, so indices stay stable for the lifetime of the store.
    """

    def __init__(self, tab_stop: int = DEFAULT_TAB_STOP) -> None:
        self.tab_stop = tab_stop
        self._rows: list[Row] = []

    @property
    def numrows(self) -> int:
        return len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __getitem__(self, index: int) -> Row:
        return self._rows[index]

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    # -- mutation -----------------------------------------------------------

    def append_row(self, text: bytes | bytearray = b"") -> int:
        """Append a row built from *text* and return its index."""
        self._rows.append(Row(chars=bytearray(text)))
        at = len(self._rows) - 1
        self.update_render(at)
        return at

    def row_insert_char(self, row: int, at: int, c: int) -> None:
        """Insert byte *c* into ``row`` at offset *at* (clamped to the row)."""
        r = self._rows[row]
        at = max(0, min(at, r.size))
        r.chars.insert(at, c)
        self.update_render(row)

    def update_render(self, row: int) -> None:
        r = self._rows[row]
        r.render = expand_tabs(r.chars, self.tab_stop)

    # -- coordinate queries -------------------------------------------------

    def cx_to_rx(self, row: int, cx: int) -> int:
        return cx_to_rx(self._rows[row].chars, cx, self.tab_stop)

    def row_size(self, row: int) -> int:
        """Length of ``row``, or 0 for the virtual row past the end."""
        if 0 <= row < len(self._rows):
            return self._rows[row].size
        return 0

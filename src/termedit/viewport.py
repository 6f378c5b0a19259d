"""Cursor state and viewport scrolling."""

from __future__ import annotations

from dataclasses import dataclass

from termedit.rows import RowStore


@dataclass
class CursorState:
    """Logical cursor position.

    ``cy`` ranges over ``[0, numrows]``; ``numrows`` is the virtual row past
    the end of the document.  ``cx`` is a byte offset into row ``cy``.
    ``rx`` is derived from ``cx`` by :meth:`Viewport.scroll` and is never set
    directly by editing code.
    """

    cx: int = 0
    cy: int = 0
    rx: int = 0


@dataclass
class Viewport:
    """Visible window onto the rendered document."""

    screenrows: int
    screencols: int
    rowoff: int = 0
    coloff: int = 0

    def scroll(self, cursor: CursorState, rows: RowStore) -> None:
        """Recompute ``cursor.rx`` and shift the offsets to keep it visible.

        Offsets only ever move as far as needed to bring the cursor back on
        screen, and never go negative.
        """
        cursor.rx = 0
        if cursor.cy < rows.numrows:
            cursor.rx = rows.cx_to_rx(cursor.cy, cursor.cx)

        if cursor.cy < self.rowoff:
            self.rowoff = cursor.cy
        if cursor.cy >= self.rowoff + self.screenrows:
            self.rowoff = cursor.cy - self.screenrows + 1
        if cursor.rx < self.coloff:
            self.coloff = cursor.rx
        if cursor.rx >= self.coloff + self.screencols:
            self.coloff = cursor.rx - self.screencols + 1

        self.rowoff = max(self.rowoff, 0)
        self.coloff = max(self.coloff, 0)

    def contains(self, cy: int, rx: int) -> bool:
        return (
            self.rowoff <= cy < self.rowoff + self.screenrows
            and self.coloff <= rx < self.coloff + self.screencols
        )

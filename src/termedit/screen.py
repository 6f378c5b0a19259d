"""Frame composition.

A frame is built into a single :class:`FrameBuffer` and handed to the
terminal in one ``write`` so the user never sees a half-drawn screen.
Composition is a pure function of the editor state passed in.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

from termedit.config import DEFAULT_STATUS_MESSAGE_TIMEOUT
from termedit.rows import RowStore
from termedit.utils import display_text, truncate_to_width, visible_width
from termedit.viewport import CursorState, Viewport

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
CLEAR_SCREEN = b"\x1b[2J"
CLEAR_LINE_RIGHT = b"\x1b[K"
REVERSE_VIDEO = b"\x1b[7m"
RESET_ATTRS = b"\x1b[m"
CRLF = b"\r\n"

_CURSOR_POSITION_FMT = "\x1b[{};{}H"

FILLER = b"~"
NO_NAME = "[No Name]"
FILENAME_MAX_CHARS = 20
STATUS_MESSAGE_MAX_BYTES = 79


def cursor_position(row: int, col: int) -> bytes:
    """Escape sequence moving the cursor to 1-indexed (*row*, *col*)."""
    return _CURSOR_POSITION_FMT.format(row, col).encode("ascii")


# ---------------------------------------------------------------------------
# FrameBuffer
# ---------------------------------------------------------------------------


class FrameBuffer:
    """Growable byte buffer for one frame."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def append(self, data: bytes | bytearray) -> None:
        self._buf += data

    def getvalue(self) -> bytes:
        return bytes(self._buf)


# ---------------------------------------------------------------------------
# StatusMessage
# ---------------------------------------------------------------------------


@dataclass
class StatusMessage:
    """Transient message shown on the bottom line."""

    text: str = ""
    set_time: float = 0.0

    def set(self, text: str, now: float | None = None) -> None:
        encoded = display_text(text).encode("utf-8")[:STATUS_MESSAGE_MAX_BYTES]
        self.text = encoded.decode("utf-8", errors="ignore")
        self.set_time = time.time() if now is None else now

    def is_visible(
        self,
        now: float | None = None,
        timeout: float = DEFAULT_STATUS_MESSAGE_TIMEOUT,
    ) -> bool:
        if not self.text:
            return False
        now = time.time() if now is None else now
        return now - self.set_time < timeout


# ---------------------------------------------------------------------------
# Drawing
# ---------------------------------------------------------------------------


def draw_welcome(out: FrameBuffer, welcome: str, screencols: int) -> None:
    banner = welcome.encode("utf-8")[:screencols]
    padding = (screencols - len(banner)) // 2
    if padding:
        out.append(FILLER)
        padding -= 1
    out.append(b" " * padding)
    out.append(banner)


def draw_rows(
    out: FrameBuffer,
    rows: RowStore,
    viewport: Viewport,
    welcome: str,
) -> None:
    for y in range(viewport.screenrows):
        filerow = y + viewport.rowoff
        if filerow >= rows.numrows:
            if rows.numrows == 0 and y == viewport.screenrows // 3:
                draw_welcome(out, welcome, viewport.screencols)
            else:
                out.append(FILLER)
        else:
            render = rows[filerow].render
            out.append(render[viewport.coloff : viewport.coloff + viewport.screencols])
        out.append(CLEAR_LINE_RIGHT)
        out.append(CRLF)


def format_status(
    filename: str | None,
    numrows: int,
    cy: int,
    screencols: int,
) -> str:
    """Status bar text, exactly *screencols* columns wide where it fits.

    The left part is cut to the width; the right part (``line/total``) is
    only drawn when it fits flush against the right edge.
    """
    # Cut at 20 code points rather than 20 bytes so a multi-byte character
    # is never split
    name = display_text(filename)[:FILENAME_MAX_CHARS] if filename else NO_NAME
    status = truncate_to_width(f"{name} - {numrows} lines", screencols)
    rstatus = f"{cy + 1}/{numrows}"

    width = visible_width(status)
    parts = [status]
    while width < screencols:
        if screencols - width == len(rstatus):
            parts.append(rstatus)
            break
        parts.append(" ")
        width += 1
    return "".join(parts)


def draw_status_bar(
    out: FrameBuffer,
    filename: str | None,
    numrows: int,
    cy: int,
    screencols: int,
) -> None:
    out.append(REVERSE_VIDEO)
    out.append(format_status(filename, numrows, cy, screencols).encode("utf-8"))
    out.append(RESET_ATTRS)
    out.append(CRLF)


def draw_message_bar(
    out: FrameBuffer,
    message: StatusMessage,
    screencols: int,
    now: float | None = None,
    timeout: float = DEFAULT_STATUS_MESSAGE_TIMEOUT,
) -> None:
    out.append(CLEAR_LINE_RIGHT)
    if message.is_visible(now, timeout):
        out.append(truncate_to_width(display_text(message.text), screencols).encode("utf-8"))


def compose(
    rows: RowStore,
    cursor: CursorState,
    viewport: Viewport,
    filename: str | None,
    message: StatusMessage,
    *,
    welcome: str = "",
    now: float | None = None,
    message_timeout: float = DEFAULT_STATUS_MESSAGE_TIMEOUT,
) -> bytes:
    """Build one complete frame.

    ``cursor.rx`` must already be current, i.e. :meth:`Viewport.scroll` has
    run for this frame.
    """
    out = FrameBuffer()
    out.append(HIDE_CURSOR)
    out.append(CURSOR_HOME)

    draw_rows(out, rows, viewport, welcome)
    draw_status_bar(out, filename, rows.numrows, cursor.cy, viewport.screencols)
    draw_message_bar(out, message, viewport.screencols, now, message_timeout)

    out.append(
        cursor_position(
            cursor.cy - viewport.rowoff + 1,
            cursor.rx - viewport.coloff + 1,
        )
    )
    out.append(SHOW_CURSOR)
    return out.getvalue()

"""Editing session: key dispatch and the main loop.

:class:`EditSession` owns the document rows, the cursor and the viewport.
It applies decoded key events to them and redraws the screen before every
key is read.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from termedit.config import EditorConfig
from termedit.fileio import load_file
from termedit.keys import ARROW_KEYS, Key, KeyEvent, ctrl_key
from termedit.rows import RowStore
from termedit.screen import CLEAR_SCREEN, CURSOR_HOME, StatusMessage, compose
from termedit.terminal import Terminal
from termedit.viewport import CursorState, Viewport

logger = logging.getLogger(__name__)

QUIT_KEY = ctrl_key("q")

# Lines reserved below the text area for the status bar and message line
RESERVED_LINES = 2


class EditSession:
    """A single-buffer editing session bound to one terminal."""

    def __init__(
        self,
        terminal: Terminal,
        config: EditorConfig | None = None,
        *,
        filename: str | None = None,
    ) -> None:
        self.terminal = terminal
        self.config = config or EditorConfig()
        self.filename = filename

        self.rows = RowStore(tab_stop=self.config.tab_stop)
        self.cursor = CursorState()
        self.message = StatusMessage()

        screen_rows, screen_cols = terminal.get_window_size()
        self.viewport = Viewport(
            screenrows=max(1, screen_rows - RESERVED_LINES),
            screencols=max(1, screen_cols),
        )
        self.running = True

    # ------------------------------------------------------------------
    # File and message
    # ------------------------------------------------------------------

    def open(self, path: str | Path) -> None:
        self.filename = str(path)
        load_file(path, self.rows)

    def set_status_message(self, text: str, now: float | None = None) -> None:
        self.message.set(text, now)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def insert_char(self, c: int) -> None:
        """Insert byte *c* at the cursor and step past it."""
        if self.cursor.cy == self.rows.numrows:
            self.rows.append_row(b"")
        self.rows.row_insert_char(self.cursor.cy, self.cursor.cx, c)
        self.cursor.cx += 1

    def move_cursor(self, key: str) -> None:
        """Move the cursor one step, then clamp ``cx`` to the new row."""
        cur = self.cursor
        numrows = self.rows.numrows
        row_size = self.rows.row_size(cur.cy)
        on_row = cur.cy < numrows

        if key == Key.left:
            if cur.cx != 0:
                cur.cx -= 1
            elif cur.cy > 0:
                cur.cy -= 1
                cur.cx = self.rows.row_size(cur.cy)
        elif key == Key.right:
            if on_row and cur.cx < row_size:
                cur.cx += 1
            elif on_row and cur.cx == row_size:
                cur.cy += 1
                cur.cx = 0
        elif key == Key.up:
            if cur.cy != 0:
                cur.cy -= 1
        elif key == Key.down:
            if cur.cy < numrows:
                cur.cy += 1

        cur.cx = min(cur.cx, self.rows.row_size(cur.cy))

    def page(self, key: str) -> None:
        """Jump to the top or bottom of the screen, then one screen further."""
        vp = self.viewport
        if key == Key.page_up:
            self.cursor.cy = vp.rowoff
            step = Key.up
        else:
            self.cursor.cy = min(vp.rowoff + vp.screenrows - 1, self.rows.numrows)
            step = Key.down
        for _ in range(vp.screenrows):
            self.move_cursor(step)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def quit(self) -> None:
        self.terminal.write(CLEAR_SCREEN)
        self.terminal.write(CURSOR_HOME)
        self.running = False
        logger.info("Quit requested")

    def process_key(self, key: KeyEvent) -> None:
        """Apply one decoded key event to the session."""
        if key == QUIT_KEY:
            self.quit()
        elif key == Key.home:
            self.cursor.cx = 0
        elif key == Key.end:
            if self.cursor.cy < self.rows.numrows:
                self.cursor.cx = self.rows[self.cursor.cy].size
        elif key in (Key.page_up, Key.page_down):
            self.page(key)
        elif key in ARROW_KEYS:
            self.move_cursor(key)
        elif isinstance(key, int):
            self.insert_char(key)
        else:
            logger.debug("Ignoring key %s", key)

    # ------------------------------------------------------------------
    # Rendering and main loop
    # ------------------------------------------------------------------

    def compose_frame(self, now: float | None = None) -> bytes:
        self.viewport.scroll(self.cursor, self.rows)
        return compose(
            self.rows,
            self.cursor,
            self.viewport,
            self.filename,
            self.message,
            welcome=self.config.welcome,
            now=now,
            message_timeout=self.config.status_message_timeout,
        )

    def refresh_screen(self, now: float | None = None) -> None:
        self.terminal.write(self.compose_frame(now))

    def run(self, keys: Iterable[KeyEvent]) -> int:
        """Redraw, then process keys until quit.  Returns the exit status."""
        it = iter(keys)
        while self.running:
            self.refresh_screen()
            self.process_key(next(it))
        return 0

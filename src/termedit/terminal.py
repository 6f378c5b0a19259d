"""Terminal abstraction for raw-mode byte I/O.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal`` backed by
stdin/stdout that manages raw mode via :mod:`termios` and determines the
window size, falling back to a cursor-position query when the size ioctl is
unavailable.
"""

from __future__ import annotations

import errno
import logging
import os
import re
import sys
import termios
from contextlib import contextmanager
from typing import Iterator, Protocol

from termedit.errors import CursorPositionError, TerminalError, WindowSizeError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_CURSOR_FAR_BOTTOM_RIGHT = b"\x1b[999C\x1b[999B"
_QUERY_CURSOR_POSITION = b"\x1b[6n"

_CURSOR_REPORT_RE = re.compile(rb"^\x1b\[(\d+);(\d+)$")
_CURSOR_REPORT_MAX = 31

# termios attribute list indices
_IFLAG, _OFLAG, _CFLAG, _LFLAG, _CC = 0, 1, 2, 3, 6


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for the editor's terminal I/O."""

    def enable_raw_mode(self) -> None: ...

    def disable_raw_mode(self) -> None: ...

    def read_byte(self) -> int | None: ...

    def write(self, data: bytes) -> None: ...

    def get_window_size(self) -> tuple[int, int]: ...


@contextmanager
def raw_mode(terminal: Terminal) -> Iterator[Terminal]:
    """Hold the terminal in raw mode for the duration of the block.

    The previous settings are restored on every exit path.
    """
    terminal.enable_raw_mode()
    try:
        yield terminal
    finally:
        terminal.disable_raw_mode()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_raw(attrs: list, read_timeout_ds: int = 1) -> list:
    """Return a raw-mode copy of a ``termios.tcgetattr`` attribute list.

    Input is delivered byte by byte without echo, signal keys, flow control
    or CR translation; output post-processing is off.  ``read`` returns after
    at most *read_timeout_ds* tenths of a second even when no byte arrived.
    """
    raw = list(attrs)
    raw[_CC] = list(attrs[_CC])
    raw[_IFLAG] &= ~(
        termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON
    )
    raw[_OFLAG] &= ~termios.OPOST
    raw[_CFLAG] |= termios.CS8
    raw[_LFLAG] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
    raw[_CC][termios.VMIN] = 0
    raw[_CC][termios.VTIME] = read_timeout_ds
    return raw


def parse_cursor_report(data: bytes) -> tuple[int, int]:
    """Parse a ``ESC [ rows ; cols`` cursor report (the ``R`` already removed)."""
    match = _CURSOR_REPORT_RE.match(data)
    if match is None:
        raise CursorPositionError("getCursorPosition", f"unexpected reply {data!r}")
    return int(match.group(1)), int(match.group(2))


def read_cursor_report(terminal: Terminal) -> tuple[int, int]:
    """Query the cursor position and parse the reply."""
    terminal.write(_QUERY_CURSOR_POSITION)
    buf = bytearray()
    while len(buf) < _CURSOR_REPORT_MAX:
        byte = terminal.read_byte()
        if byte is None or byte == ord("R"):
            break
        buf.append(byte)
    return parse_cursor_report(bytes(buf))


def window_size_from_cursor(terminal: Terminal) -> tuple[int, int]:
    """Find the window size by pushing the cursor to the bottom-right corner."""
    logger.debug("Window size ioctl unavailable, asking for a cursor report")
    terminal.write(_CURSOR_FAR_BOTTOM_RIGHT)
    return read_cursor_report(terminal)


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Terminal backed by the process's stdin and stdout file descriptors."""

    def __init__(
        self,
        stdin_fd: int | None = None,
        stdout_fd: int | None = None,
        read_timeout_ds: int = 1,
    ) -> None:
        self._stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
        self._stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
        self._read_timeout_ds = read_timeout_ds
        self._original_termios: list | None = None

    # -- raw mode -----------------------------------------------------------

    def enable_raw_mode(self) -> None:
        try:
            self._original_termios = termios.tcgetattr(self._stdin_fd)
        except termios.error as e:
            raise TerminalError("tcgetattr", str(e)) from e

        raw = make_raw(self._original_termios, self._read_timeout_ds)
        try:
            termios.tcsetattr(self._stdin_fd, termios.TCSAFLUSH, raw)
        except termios.error as e:
            raise TerminalError("tcsetattr", str(e)) from e
        logger.debug("Raw mode enabled on fd %d", self._stdin_fd)

    def disable_raw_mode(self) -> None:
        if self._original_termios is None:
            return
        attrs, self._original_termios = self._original_termios, None
        try:
            termios.tcsetattr(self._stdin_fd, termios.TCSAFLUSH, attrs)
        except termios.error as e:
            raise TerminalError("tcsetattr", str(e)) from e
        logger.debug("Terminal settings restored on fd %d", self._stdin_fd)

    # -- I/O ----------------------------------------------------------------

    def read_byte(self) -> int | None:
        """Read one byte, or return ``None`` if the read timed out."""
        try:
            data = os.read(self._stdin_fd, 1)
        except OSError as e:
            if e.errno == errno.EAGAIN:
                return None
            raise TerminalError("read", e.strerror or str(e)) from e
        if not data:
            return None
        return data[0]

    def write(self, data: bytes) -> None:
        """Write all of *data* to stdout."""
        view = memoryview(data)
        while view:
            try:
                written = os.write(self._stdout_fd, view)
            except OSError as e:
                raise TerminalError("write", e.strerror or str(e)) from e
            view = view[written:]

    # -- window size --------------------------------------------------------

    def get_window_size(self) -> tuple[int, int]:
        """Return ``(rows, columns)`` of the output terminal."""
        try:
            size = os.get_terminal_size(self._stdout_fd)
        except (ValueError, OSError):
            size = None

        if size is not None and size.columns != 0:
            return size.lines, size.columns

        try:
            return window_size_from_cursor(self)
        except TerminalError as e:
            raise WindowSizeError("getWindowSize", e.message) from e

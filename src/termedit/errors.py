"""Error types for the editor.

Only two tiers exist.  Anything that subclasses :class:`FatalError` ends the
process after the terminal has been restored; everything else the editor
encounters at runtime is clamped silently and never raised.
"""

from __future__ import annotations


class EditorError(Exception):
    """Base class for all editor errors."""


class ConfigError(EditorError):
    """Invalid configuration value (reported before the terminal is touched)."""


class FatalError(EditorError):
    """An unrecoverable I/O failure.

    ``operation`` names the call that failed (``"tcgetattr"``, ``"fopen"``,
    ...) and is used as the prefix of the diagnostic printed on exit.
    """

    def __init__(self, operation: str, message: str = "") -> None:
        self.operation = operation
        self.message = message
        super().__init__(f"{operation}: {message}" if message else operation)


class TerminalError(FatalError):
    """Reading or writing terminal attributes, or reading stdin, failed."""


class WindowSizeError(FatalError):
    """The terminal extent could not be determined."""


class CursorPositionError(WindowSizeError):
    """The cursor-position report was missing or malformed."""


class FileOpenError(FatalError):
    """The file named on the command line could not be opened."""

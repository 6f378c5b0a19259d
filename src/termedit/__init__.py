"""termedit: a minimal terminal text editor."""

__version__ = "0.0.1"

from termedit.config import EditorConfig, load_config
from termedit.decoder import ByteSource, KeyDecoder
from termedit.errors import (
    ConfigError,
    CursorPositionError,
    EditorError,
    FatalError,
    FileOpenError,
    TerminalError,
    WindowSizeError,
)
from termedit.keys import Key, KeyEvent, ctrl_key
from termedit.rows import Row, RowStore
from termedit.screen import FrameBuffer, StatusMessage, compose
from termedit.session import EditSession
from termedit.terminal import ProcessTerminal, Terminal, raw_mode
from termedit.viewport import CursorState, Viewport

__all__ = [
    "ByteSource",
    "ConfigError",
    "CursorPositionError",
    "CursorState",
    "EditSession",
    "EditorConfig",
    "EditorError",
    "FatalError",
    "FileOpenError",
    "FrameBuffer",
    "Key",
    "KeyDecoder",
    "KeyEvent",
    "ProcessTerminal",
    "Row",
    "RowStore",
    "StatusMessage",
    "Terminal",
    "TerminalError",
    "Viewport",
    "WindowSizeError",
    "__version__",
    "compose",
    "ctrl_key",
    "load_config",
    "raw_mode",
]

"""Loading files into a :class:`~termedit.rows.RowStore`."""

from __future__ import annotations

import logging
from pathlib import Path

from termedit.errors import FileOpenError
from termedit.rows import RowStore

logger = logging.getLogger(__name__)


def split_lines(data: bytes) -> list[bytes]:
    """Split file contents into lines without their line terminators.

    Every trailing ``\\n`` and ``\\r`` byte is stripped from each line.  A
    final newline does not produce an extra empty line.
    """
    lines = data.split(b"\n")
    if lines and lines[-1] == b"":
        lines.pop()
    return [line.rstrip(b"\r\n") for line in lines]


def load_file(path: str | Path, rows: RowStore) -> int:
    """Append the lines of *path* to *rows*; return the number appended."""
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise FileOpenError("fopen", f"{path}: {e.strerror or e}") from e

    lines = split_lines(data)
    for line in lines:
        rows.append_row(line)
    logger.info("Loaded %s (%d lines)", path, len(lines))
    return len(lines)

"""Print one file to stdout, raw or syntax highlighted.

Read and write failures are reported on stderr and never abort the process.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import BinaryIO, TextIO

from ..config import DEFAULT_STYLE
from .syntax import decode_text, highlight_source

logger = logging.getLogger(__name__)


def _stream_is_tty(stream: object) -> bool:
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty()) if isatty is not None else False
    except ValueError:
        return False


def render_file_bytes(data: bytes, path: Path, highlight: bool, style: str = DEFAULT_STYLE) -> bytes:
    """Return the bytes to emit for ``data``.

    Raw bytes pass through untouched unless ``highlight`` is set and Pygments
    produces a rendition.
    """
    if not highlight or not data:
        return data
    rendered = highlight_source(decode_text(data), path, style)
    if rendered is None:
        return data
    return rendered.encode("utf-8", errors="replace")


def view_file(
    path: Path,
    highlight: bool = True,
    style: str = DEFAULT_STYLE,
    stdout: BinaryIO | None = None,
    stderr: TextIO | None = None,
) -> bool:
    """Write the contents of ``path`` to ``stdout``.

    Highlighting only applies when ``stdout`` is attached to a terminal.
    Returns ``False`` after printing a diagnostic when the file could not be
    read or written.
    """
    out = stdout if stdout is not None else sys.stdout.buffer
    err = stderr if stderr is not None else sys.stderr
    use_highlight = highlight and _stream_is_tty(out)
    logger.debug("viewing %s (highlight=%s)", path, use_highlight)

    try:
        data = path.read_bytes()
        out.write(render_file_bytes(data, path, use_highlight, style))
        out.flush()
    except OSError as exc:
        reason = exc.strerror or str(exc)
        err.write(f"catls: {path}: {reason}\n")
        return False
    return True

"""Source decoding and Pygments syntax highlighting.

Pygments is imported lazily on first use so plain listings never pay for it.
Every failure path returns ``None`` and callers fall back to raw bytes.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import DEFAULT_STYLE

logger = logging.getLogger(__name__)

_PYGMENTS_READY = False
_PYGMENTS_AVAILABLE = False
_PYGMENTS_HIGHLIGHT = None
_PYGMENTS_GUESS_LEXER_FOR_FILENAME = None
_PYGMENTS_GUESS_LEXER = None
_PYGMENTS_TEXT_LEXER = None
_PYGMENTS_TERMINAL_FORMATTER = None
_PYGMENTS_GET_STYLE_BY_NAME = None
_PYGMENTS_FORMATTERS: dict[str, object] = {}


def decode_text(data: bytes) -> str:
    """Decode file bytes using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="replace")


def _ensure_pygments_loaded() -> bool:
    """Lazily import and cache Pygments callables.

    Returns whether Pygments is available in the runtime environment.
    """
    global _PYGMENTS_READY
    global _PYGMENTS_AVAILABLE
    global _PYGMENTS_HIGHLIGHT
    global _PYGMENTS_GUESS_LEXER_FOR_FILENAME
    global _PYGMENTS_GUESS_LEXER
    global _PYGMENTS_TEXT_LEXER
    global _PYGMENTS_TERMINAL_FORMATTER
    global _PYGMENTS_GET_STYLE_BY_NAME

    if _PYGMENTS_READY:
        return _PYGMENTS_AVAILABLE

    _PYGMENTS_READY = True
    try:
        from pygments import highlight as pygments_highlight
        from pygments.formatters import Terminal256Formatter
        from pygments.lexers import TextLexer, guess_lexer, guess_lexer_for_filename
        from pygments.styles import get_style_by_name
    except ImportError:
        logger.debug("pygments unavailable, highlighting disabled")
        _PYGMENTS_AVAILABLE = False
        return False

    _PYGMENTS_HIGHLIGHT = pygments_highlight
    _PYGMENTS_GUESS_LEXER_FOR_FILENAME = guess_lexer_for_filename
    _PYGMENTS_GUESS_LEXER = guess_lexer
    _PYGMENTS_TEXT_LEXER = TextLexer
    _PYGMENTS_TERMINAL_FORMATTER = Terminal256Formatter
    _PYGMENTS_GET_STYLE_BY_NAME = get_style_by_name
    _PYGMENTS_AVAILABLE = True
    return True


def _normalize_style(style: str) -> str:
    """Validate the requested style name, substituting the default when unknown."""
    from pygments.util import ClassNotFound

    try:
        assert _PYGMENTS_GET_STYLE_BY_NAME is not None
        _PYGMENTS_GET_STYLE_BY_NAME(style)
    except ClassNotFound:
        logger.debug("unknown pygments style %r, using %s", style, DEFAULT_STYLE)
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str):
    """Return cached Pygments terminal formatter for style name."""
    formatter = _PYGMENTS_FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    assert _PYGMENTS_TERMINAL_FORMATTER is not None
    formatter = _PYGMENTS_TERMINAL_FORMATTER(style=style)
    _PYGMENTS_FORMATTERS[style] = formatter
    return formatter


# Keep leading blank lines and a missing final newline exactly as in the file.
_LEXER_OPTIONS = {"stripnl": False, "ensurenl": False}


def _lexer_for(source: str, path: Path):
    """Pick a lexer by file name, then by content alone, then plain text."""
    from pygments.util import ClassNotFound

    assert _PYGMENTS_GUESS_LEXER_FOR_FILENAME is not None
    assert _PYGMENTS_GUESS_LEXER is not None
    assert _PYGMENTS_TEXT_LEXER is not None
    try:
        return _PYGMENTS_GUESS_LEXER_FOR_FILENAME(path.name, source, **_LEXER_OPTIONS)
    except ClassNotFound:
        pass
    try:
        return _PYGMENTS_GUESS_LEXER(source, **_LEXER_OPTIONS)
    except ClassNotFound:
        return _PYGMENTS_TEXT_LEXER(**_LEXER_OPTIONS)


def highlight_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str | None:
    """Highlight source with Pygments, returning ``None`` on any failure.

    The lexer is picked from the file name, falling back to a content guess,
    so extensionless scripts with a shebang still highlight.
    """
    if not _ensure_pygments_loaded():
        return None

    formatter = _formatter_for_style(_normalize_style(style))
    lexer = _lexer_for(source, path)

    try:
        assert _PYGMENTS_HIGHLIGHT is not None
        return _PYGMENTS_HIGHLIGHT(source, lexer, formatter)
    except Exception as exc:
        logger.debug("highlighting %s failed: %s", path, exc)
        return None

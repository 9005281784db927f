"""Directory-listing mode: metadata rows with colorized names."""

from .colors import ColorRules, Style, paint, parse_sgr
from .entry import EntryInfo
from .identity import group_name, user_name
from .lister import format_row, iter_entries, list_directory
from .permissions import format_mode, permission_string, type_glyph

__all__ = [
    "ColorRules",
    "EntryInfo",
    "Style",
    "format_mode",
    "format_row",
    "group_name",
    "iter_entries",
    "list_directory",
    "paint",
    "parse_sgr",
    "permission_string",
    "type_glyph",
    "user_name",
]

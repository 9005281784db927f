"""Mode-bit rendering for long-format rows."""

from __future__ import annotations

import stat

# Most-significant group first: owner, group, other.
PERMISSION_BITS: tuple[tuple[int, str], ...] = (
    (0o400, "r"),
    (0o200, "w"),
    (0o100, "x"),
    (0o040, "r"),
    (0o020, "w"),
    (0o010, "x"),
    (0o004, "r"),
    (0o002, "w"),
    (0o001, "x"),
)


def type_glyph(mode: int) -> str:
    """Return ``d`` for directories, ``l`` for symlinks, ``-`` for everything else."""
    if stat.S_ISDIR(mode):
        return "d"
    if stat.S_ISLNK(mode):
        return "l"
    return "-"


def permission_string(mode: int) -> str:
    """Render the nine permission bits as ``rwxr-xr-x`` style text."""
    return "".join(letter if mode & bit else "-" for bit, letter in PERMISSION_BITS)


def format_mode(mode: int) -> str:
    return type_glyph(mode) + permission_string(mode)

"""ANSI escape helpers shared by the viewer and the directory lister.

Provides SGR sequence building, escape stripping, and control-byte
neutralization so printed names cannot move the cursor or ring the bell.
"""

from __future__ import annotations

import re

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
RESET = "\033[0m"

# C0 controls (newline and tab included) + DEL + C1 controls.
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def sgr(codes: list[str] | tuple[str, ...]) -> str:
    """Join SGR parameter fragments into one escape sequence.

    Returns an empty string when there is nothing to set.
    """
    if not codes:
        return ""
    return f"\033[{';'.join(codes)}m"


def strip_ansi(text: str) -> str:
    """Remove CSI escape sequences, leaving only printable text."""
    return ANSI_ESCAPE_RE.sub("", text)


def escape_control_chars(text: str) -> str:
    """Escape every C0/C1 control character, newline and tab included, as ``\\xNN``.

    Used for single-line fields such as entry names, where even common
    whitespace controls would break row alignment.
    """
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", text)

"""Owner and group name resolution with numeric fallback.

Lookups are not cached; each row resolves its ids independently.
"""

from __future__ import annotations

import grp
import pwd


def user_name(uid: int) -> str:
    """Return the account name for ``uid``, or ``str(uid)`` when unknown."""
    try:
        return pwd.getpwuid(uid).pw_name
    except (KeyError, OverflowError):
        return str(uid)


def group_name(gid: int) -> str:
    """Return the group name for ``gid``, or ``str(gid)`` when unknown."""
    try:
        return grp.getgrgid(gid).gr_name
    except (KeyError, OverflowError):
        return str(gid)

"""Long-format directory listing.

Rows are emitted in directory enumeration order unless sorting is requested.
Entries whose metadata cannot be read are dropped without a diagnostic; the
listing is best effort, not a consistent snapshot.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path
from typing import TextIO

from ..ansi import escape_control_chars
from .colors import ColorRules, paint
from .entry import EntryInfo
from .identity import group_name, user_name
from .permissions import format_mode

TIME_FORMAT = "%b %d %H:%M"

logger = logging.getLogger(__name__)


def display_name(name: str) -> str:
    """Make an entry name printable: undecodable bytes become U+FFFD, controls are escaped."""
    lossy = name.encode("utf-8", errors="surrogateescape").decode("utf-8", errors="replace")
    return escape_control_chars(lossy)


def format_mtime(mtime: float) -> str:
    return datetime.fromtimestamp(mtime).strftime(TIME_FORMAT)


def format_row(info: EntryInfo, rules: ColorRules | None = None) -> str:
    """Render one ``ls -l`` style row (without trailing newline)."""
    style = rules.style_for_path(info.path, info.stat_result) if rules else None
    name = paint(display_name(info.name), style)
    return (
        f"{format_mode(info.mode)} {info.nlink:>2} "
        f"{user_name(info.uid):<8.8} {group_name(info.gid):<8.8} "
        f"{info.size:>8} {format_mtime(info.mtime)} {name}"
    )


def iter_entries(directory: Path, sort: bool = False) -> Iterator[EntryInfo]:
    """Yield metadata for each child of ``directory``.

    ``OSError`` from opening or reading the directory itself propagates;
    per-entry stat failures are skipped.
    """
    infos: list[EntryInfo] = []
    with os.scandir(directory) as entries:
        for entry in entries:
            try:
                info = EntryInfo.from_dir_entry(entry)
            except OSError as exc:
                logger.debug("skipping %s: %s", entry.path, exc)
                continue
            if not sort:
                yield info
                continue
            infos.append(info)

    if sort:
        infos.sort(key=lambda item: (item.name.lower(), item.name))
        yield from infos


def list_directory(
    directory: Path,
    rules: ColorRules | None = None,
    sort: bool = False,
    stdout: TextIO | None = None,
) -> int:
    """Write one row per readable entry of ``directory`` and return the row count."""
    out = stdout if stdout is not None else sys.stdout
    count = 0
    for info in iter_entries(directory, sort=sort):
        out.write(format_row(info, rules) + "\n")
        count += 1
    out.flush()
    logger.debug("listed %d entries in %s", count, directory)
    return count

"""Directory-entry metadata snapshot used to build one listing row."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class EntryInfo:
    """``lstat`` fields consumed by the long-format row."""

    name: str
    path: Path
    mode: int
    nlink: int
    uid: int
    gid: int
    size: int
    mtime: float
    stat_result: os.stat_result

    @classmethod
    def from_dir_entry(cls, entry: os.DirEntry) -> EntryInfo:
        """Read metadata without following symlinks.

        Raises ``OSError`` when the entry vanished or cannot be stat'ed.
        """
        st = entry.stat(follow_symlinks=False)
        return cls(
            name=entry.name,
            path=Path(entry.path),
            mode=st.st_mode,
            nlink=st.st_nlink,
            uid=st.st_uid,
            gid=st.st_gid,
            size=st.st_size,
            mtime=st.st_mtime,
            stat_result=st,
        )

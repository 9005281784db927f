"""``LS_COLORS`` parsing and per-path style lookup.

The rule table is parsed once per invocation and handed to the lister as an
explicit value. Lookup follows GNU ``ls`` precedence: file-type indicators
first, then suffix patterns for plain regular files, then ``fi``/``no``.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from ..ansi import RESET, sgr

logger = logging.getLogger(__name__)

LS_COLORS_ENV = "LS_COLORS"


@dataclass(frozen=True)
class Style:
    """Foreground/background SGR fragments plus bold weight."""

    foreground: str | None = None
    background: str | None = None
    bold: bool = False

    @property
    def is_plain(self) -> bool:
        return self.foreground is None and self.background is None and not self.bold

    def codes(self) -> tuple[str, ...]:
        out: list[str] = []
        if self.bold:
            out.append("1")
        if self.foreground is not None:
            out.append(self.foreground)
        if self.background is not None:
            out.append(self.background)
        return tuple(out)

    def prefix(self) -> str:
        return sgr(self.codes())


def _extended_color(base: int, params: list[int], idx: int) -> tuple[str | None, int]:
    """Parse ``38;5;n`` / ``38;2;r;g;b`` tails starting after the 38/48 marker.

    Returns the fragment (or ``None`` when malformed) and the next index.
    """
    if idx >= len(params):
        return None, idx
    kind = params[idx]
    if kind == 5 and idx + 1 < len(params):
        return f"{base};5;{params[idx + 1]}", idx + 2
    if kind == 2 and idx + 3 < len(params):
        r, g, b = params[idx + 1 : idx + 4]
        return f"{base};2;{r};{g};{b}", idx + 4
    return None, len(params)


def parse_sgr(codes: str) -> Style | None:
    """Parse an SGR parameter string such as ``01;34`` into a ``Style``.

    Attributes other than bold, foreground and background are ignored.
    Returns ``None`` when any parameter is not a number.
    """
    params: list[int] = []
    for token in codes.split(";"):
        if token == "":
            params.append(0)
            continue
        if not token.isdigit():
            return None
        params.append(int(token))

    foreground: str | None = None
    background: str | None = None
    bold = False
    idx = 0
    while idx < len(params):
        code = params[idx]
        idx += 1
        if code == 0:
            foreground, background, bold = None, None, False
        elif code == 1:
            bold = True
        elif code == 22:
            bold = False
        elif 30 <= code <= 37 or 90 <= code <= 97:
            foreground = str(code)
        elif code == 39:
            foreground = None
        elif 40 <= code <= 47 or 100 <= code <= 107:
            background = str(code)
        elif code == 49:
            background = None
        elif code in (38, 48):
            fragment, idx = _extended_color(code, params, idx)
            if fragment is None:
                continue
            if code == 38:
                foreground = fragment
            else:
                background = fragment
    return Style(foreground=foreground, background=background, bold=bold)


@dataclass(frozen=True)
class ColorRules:
    """Read-only indicator and suffix tables parsed from ``LS_COLORS``."""

    indicators: Mapping[str, Style] = field(default_factory=lambda: MappingProxyType({}))
    suffixes: tuple[tuple[str, Style], ...] = ()

    @classmethod
    def parse(cls, value: str) -> ColorRules:
        """Parse ``key=codes`` items separated by ``:``; bad items are skipped."""
        indicators: dict[str, Style] = {}
        suffixes: dict[str, Style] = {}
        for item in value.split(":"):
            key, sep, codes = item.partition("=")
            if not sep or not key:
                continue
            style = parse_sgr(codes)
            if style is None:
                logger.debug("skipping LS_COLORS item %r", item)
                continue
            if key.startswith("*"):
                suffix = key[1:]
                if suffix and not any(ch in suffix for ch in "*?["):
                    suffixes[suffix.lower()] = style
                continue
            indicators[key] = style
        return cls(indicators=MappingProxyType(indicators), suffixes=tuple(suffixes.items()))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ColorRules:
        """Build the table from ``LS_COLORS``; absent or empty means no rules."""
        env = os.environ if environ is None else environ
        value = env.get(LS_COLORS_ENV, "")
        if not value:
            return cls()
        return cls.parse(value)

    def __bool__(self) -> bool:
        return bool(self.indicators) or bool(self.suffixes)

    def _indicator(self, *keys: str) -> Style | None:
        """Return the first indicator among ``keys`` that sets any attribute."""
        for key in keys:
            style = self.indicators.get(key)
            if style is not None and not style.is_plain:
                return style
        return None

    def _suffix(self, name: str) -> Style | None:
        lowered = name.lower()
        best: tuple[int, Style] | None = None
        for suffix, style in self.suffixes:
            if lowered.endswith(suffix) and (best is None or len(suffix) > best[0]):
                best = (len(suffix), style)
        return best[1] if best is not None else None

    def style_for_path(self, path: Path | str, st: os.stat_result | None = None) -> Style | None:
        """Resolve the display style for ``path``.

        ``st`` should be the ``lstat`` result when the caller already has it.
        Returns ``None`` when no rule applies or the path cannot be stat'ed.
        """
        if not self:
            return None
        if st is None:
            try:
                st = os.lstat(path)
            except OSError:
                return None
        mode = st.st_mode

        if stat.S_ISDIR(mode):
            sticky = bool(mode & stat.S_ISVTX)
            other_writable = bool(mode & stat.S_IWOTH)
            keys: list[str] = []
            if sticky and other_writable:
                keys.append("tw")
            if other_writable:
                keys.append("ow")
            if sticky:
                keys.append("st")
            keys.append("di")
            return self._indicator(*keys)
        if stat.S_ISLNK(mode):
            if not os.path.exists(path):
                return self._indicator("or", "ln")
            return self._indicator("ln")
        if stat.S_ISFIFO(mode):
            return self._indicator("pi")
        if stat.S_ISSOCK(mode):
            return self._indicator("so")
        if stat.S_ISBLK(mode):
            return self._indicator("bd")
        if stat.S_ISCHR(mode):
            return self._indicator("cd")
        if not stat.S_ISREG(mode):
            return self._indicator("no")

        if mode & stat.S_ISUID and self._indicator("su") is not None:
            return self._indicator("su")
        if mode & stat.S_ISGID and self._indicator("sg") is not None:
            return self._indicator("sg")
        if mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH) and self._indicator("ex") is not None:
            return self._indicator("ex")
        if st.st_nlink > 1 and self._indicator("mh") is not None:
            return self._indicator("mh")

        by_suffix = self._suffix(os.path.basename(os.fspath(path)))
        if by_suffix is not None and not by_suffix.is_plain:
            return by_suffix
        return self._indicator("fi", "no")


def paint(text: str, style: Style | None) -> str:
    """Wrap ``text`` in the SGR sequence for ``style``; plain text when unstyled."""
    if style is None or style.is_plain:
        return text
    return f"{style.prefix()}{text}{RESET}"

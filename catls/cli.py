"""Command-line front door for catls.

Parses CLI options, resolves the target path, and dispatches to file-view
mode for regular files or to the long-format lister for everything else.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import load_settings
from .listing import ColorRules, list_directory
from .viewer import view_file

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catls",
        description="Print a file, or list a directory in long format with colored names.",
    )
    parser.add_argument("path", nargs="?", default=None, help="File or directory. Defaults to current directory.")
    parser.add_argument("--style", default=None, help="Pygments style name for file highlighting.")
    parser.add_argument("--no-color", action="store_true", help="Disable highlighting and colored names.")
    parser.add_argument("--plain", action="store_true", help="Print files raw, without syntax highlighting.")
    parser.add_argument("--sort", action="store_true", help="Sort directory entries by name.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr.")
    return parser


def main(argv: list[str] | None = None, default_path: Path | None = None) -> int:
    """Parse arguments and run file-view or listing mode.

    Extra arguments are ignored. Returns ``0`` on completion of either mode,
    including a file that could not be read. A directory that cannot be listed
    raises ``SystemExit`` with a diagnostic.
    """
    parser = build_parser()
    args, ignored = parser.parse_known_args(argv)
    _configure_logging(args.verbose)
    if ignored:
        logger.debug("ignoring extra arguments: %s", ignored)

    settings = load_settings()
    style = args.style or settings.style
    highlight = settings.highlight and not (args.plain or args.no_color)
    sort = args.sort or settings.sort

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)

    if path.is_file():
        logger.debug("file mode: %s", path)
        view_file(path, highlight=highlight, style=style)
        return 0

    logger.debug("listing mode: %s", path)
    rules = ColorRules() if args.no_color else ColorRules.from_env()
    try:
        list_directory(path, rules, sort=sort)
    except OSError as exc:
        reason = exc.strerror or str(exc)
        raise SystemExit(f"catls: {path}: {reason}") from exc
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""File-view mode: raw or highlighted file output."""

from .file import render_file_bytes, view_file

__all__ = ["render_file_bytes", "view_file"]

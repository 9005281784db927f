"""CLI dispatch and default-path behavior tests.

Verifies how ``catls.cli.main`` chooses between file-view and listing modes
and how it reports failures.
"""

from __future__ import annotations

import io
import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from catls import cli


class _CapturedStdout:
    """Text stdout whose ``.buffer`` collects raw bytes, like a real console."""

    def __init__(self) -> None:
        self.raw = io.BytesIO()
        self.stream = io.TextIOWrapper(self.raw, encoding="utf-8", write_through=True)

    def value(self) -> bytes:
        self.stream.flush()
        return self.raw.getvalue()


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        config_patch = mock.patch("catls.config.CONFIG_PATH", self.root / "no-config.json")
        config_patch.start()
        self.addCleanup(config_patch.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()


class CliDispatchTests(CliTestCase):
    def test_regular_file_routes_to_file_viewer(self) -> None:
        target = self.root / "target.txt"
        target.write_text("hello\n", encoding="utf-8")

        with (
            mock.patch("catls.cli.view_file") as view_file,
            mock.patch("catls.cli.list_directory") as list_directory,
        ):
            status = cli.main([str(target)])

        self.assertEqual(status, 0)
        view_file.assert_called_once()
        self.assertEqual(view_file.call_args.args[0], target)
        list_directory.assert_not_called()

    def test_directory_routes_to_lister(self) -> None:
        with (
            mock.patch("catls.cli.view_file") as view_file,
            mock.patch("catls.cli.list_directory") as list_directory,
        ):
            status = cli.main([str(self.root)])

        self.assertEqual(status, 0)
        view_file.assert_not_called()
        self.assertEqual(list_directory.call_args.args[0], self.root)

    def test_no_argument_defaults_to_current_working_directory(self) -> None:
        previous_cwd = Path.cwd()
        try:
            os.chdir(self.root)
            with mock.patch("catls.cli.list_directory") as list_directory:
                cli.main([])
        finally:
            os.chdir(previous_cwd)

        self.assertEqual(list_directory.call_args.args[0].resolve(), self.root)

    def test_empty_argument_uses_default_path(self) -> None:
        with mock.patch("catls.cli.list_directory") as list_directory:
            cli.main([""], default_path=self.root)

        self.assertEqual(list_directory.call_args.args[0], self.root)

    def test_extra_arguments_are_ignored(self) -> None:
        target = self.root / "first.txt"
        target.write_text("1\n", encoding="utf-8")

        with mock.patch("catls.cli.view_file") as view_file:
            status = cli.main([str(target), "second", "--unknown-flag"])

        self.assertEqual(status, 0)
        self.assertEqual(view_file.call_args.args[0], target)

    def test_flags_control_highlight_style_and_sort(self) -> None:
        target = self.root / "a.py"
        target.write_text("x = 1\n", encoding="utf-8")

        with mock.patch("catls.cli.view_file") as view_file:
            cli.main([str(target), "--plain", "--style", "vim"])
        with mock.patch("catls.cli.list_directory") as list_directory:
            cli.main([str(self.root), "--sort"])

        self.assertEqual(view_file.call_args.kwargs, {"highlight": False, "style": "vim"})
        self.assertTrue(list_directory.call_args.kwargs["sort"])

    def test_config_file_supplies_defaults(self) -> None:
        config_path = self.root / "config.json"
        config_path.write_text(json.dumps({"style": "emacs", "highlight": False, "sort": True}), encoding="utf-8")
        target = self.root / "a.py"
        target.write_text("x = 1\n", encoding="utf-8")

        with (
            mock.patch("catls.config.CONFIG_PATH", config_path),
            mock.patch("catls.cli.view_file") as view_file,
            mock.patch("catls.cli.list_directory") as list_directory,
        ):
            cli.main([str(target)])
            cli.main([str(self.root)])

        self.assertEqual(view_file.call_args.kwargs, {"highlight": False, "style": "emacs"})
        self.assertTrue(list_directory.call_args.kwargs["sort"])


class CliOutputTests(CliTestCase):
    def _run(self, argv: list[str], env: dict[str, str] | None = None) -> bytes:
        captured = _CapturedStdout()
        with (
            mock.patch.object(sys, "stdout", captured.stream),
            mock.patch.dict(os.environ, env or {}, clear=False),
        ):
            status = cli.main(argv)
        self.assertEqual(status, 0)
        return captured.value()

    def test_file_contents_are_printed_verbatim(self) -> None:
        payload = b"alpha\n\tbeta\xc3\xa9\n"
        target = self.root / "data.txt"
        target.write_bytes(payload)

        self.assertEqual(self._run([str(target)]), payload)

    def test_empty_file_prints_nothing(self) -> None:
        target = self.root / "empty"
        target.write_bytes(b"")

        self.assertEqual(self._run([str(target)]), b"")

    def test_empty_directory_prints_no_rows(self) -> None:
        empty = self.root / "empty_dir"
        empty.mkdir()

        self.assertEqual(self._run([str(empty)]), b"")

    def test_listing_colors_names_from_ls_colors(self) -> None:
        listed = self.root / "listed"
        listed.mkdir()
        (listed / "sub").mkdir()

        output = self._run([str(listed)], env={"LS_COLORS": "di=01;34"}).decode("utf-8")

        self.assertTrue(output.startswith("d"))
        self.assertTrue(output.endswith("\x1b[1;34msub\x1b[0m\n"))

    def test_no_color_disables_name_colors(self) -> None:
        listed = self.root / "listed"
        listed.mkdir()
        (listed / "sub").mkdir()

        output = self._run([str(listed), "--no-color"], env={"LS_COLORS": "di=01;34"}).decode("utf-8")

        self.assertNotIn("\x1b", output)
        self.assertTrue(output.endswith(" sub\n"))

    def test_unreadable_file_reports_error_and_exits_cleanly(self) -> None:
        target = self.root / "secret.txt"
        target.write_text("x", encoding="utf-8")
        stderr = io.StringIO()

        with (
            mock.patch("catls.viewer.file.Path.read_bytes", side_effect=PermissionError(13, "Permission denied")),
            mock.patch.object(sys, "stderr", stderr),
        ):
            output = self._run([str(target)])

        self.assertEqual(output, b"")
        self.assertEqual(stderr.getvalue(), f"catls: {target}: Permission denied\n")

    def test_missing_path_aborts_with_diagnostic(self) -> None:
        missing = self.root / "missing"

        with self.assertRaises(SystemExit) as exc_info:
            cli.main([str(missing)])

        self.assertEqual(str(exc_info.exception), f"catls: {missing}: No such file or directory")


if __name__ == "__main__":
    unittest.main()

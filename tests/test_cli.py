"""
Script: tests/test_cli.py
What: Tests for the shared `rust_image_tools` command dispatcher.
Doing: Checks command-map entries, parser behavior, and command-run paths.
Why: Makes sure command names still point to the right modules.
Goal: Protect the main command entry surface used by operators and CI.
"""

from __future__ import annotations

import contextlib
import io
import unittest

from rust_image_tools.cli import build_parser, command_map, main, run_command


class CliTests(unittest.TestCase):
    def test_command_map_contains_expected_entries(self) -> None:
        commands = command_map()
        self.assertEqual(set(commands.keys()), {"build-images", "list-versions"})

    def test_parser_accepts_known_command(self) -> None:
        parser = build_parser({"demo-command": lambda _args: None})
        args = parser.parse_args(["demo-command"])
        self.assertEqual(args.command, "demo-command")
        self.assertEqual(args.args, [])

    def test_parser_passes_remaining_args_through(self) -> None:
        parser = build_parser({"demo-command": lambda _args: None})
        args = parser.parse_args(["demo-command", "1.45.0", "--dry-run"])
        self.assertEqual(args.args, ["1.45.0", "--dry-run"])

    def test_parser_rejects_unknown_command(self) -> None:
        parser = build_parser({"demo-command": lambda _args: None})
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                parser.parse_args(["other"])
        self.assertEqual(ctx.exception.code, 2)

    def test_run_command_calls_target_function(self) -> None:
        seen: list[list[str]] = []
        run_command("demo", ["a", "b"], {"demo": seen.append})
        self.assertEqual(seen, [["a", "b"]])

    def test_build_images_without_version_exits_2(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(["build-images"])
        self.assertEqual(ctx.exception.code, 2)

    def test_build_images_dry_run(self) -> None:
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            main(["build-images", "1.45.0", "--dry-run", "--namespace", "ns"])
        self.assertIn("+ docker build -t ns/rust:1.45.0-rt .", stdout.getvalue())


if __name__ == "__main__":
    unittest.main()

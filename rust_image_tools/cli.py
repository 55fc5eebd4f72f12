from __future__ import annotations

import argparse
from collections.abc import Callable, Mapping

Command = Callable[[list[str]], None]


def command_map() -> dict[str, Command]:
    """
    Map CLI command names to Python entry functions.

    Each value is a `main(argv)` function from one helper module. Those
    functions handle their own errors and exit statuses.
    """
    from rust_image_tools.build_images import main as build_images
    from rust_image_tools.list_versions import main as list_versions

    return {
        "build-images": build_images,
        "list-versions": list_versions,
    }


def build_parser(commands: Mapping[str, Command]) -> argparse.ArgumentParser:
    """Build argument parser with one positional command choice."""
    parser = argparse.ArgumentParser(
        prog="python3 -m rust_image_tools.cli",
        description="Run one image helper command.",
    )
    parser.add_argument("command", choices=sorted(commands.keys()))
    # Everything after the command name belongs to that command.
    parser.add_argument("args", nargs=argparse.REMAINDER)
    return parser


def run_command(command: str, args: list[str], commands: Mapping[str, Command]) -> None:
    """
    Run one registered command.

    `commands` is passed in to keep this function easy to test.
    """
    commands[command](args)


def main(argv: list[str] | None = None) -> None:
    # Build command registry once so parser and dispatcher use the same keys.
    commands = command_map()
    parser = build_parser(commands)
    args = parser.parse_args(argv)
    run_command(args.command, args.args, commands)


if __name__ == "__main__":
    main()

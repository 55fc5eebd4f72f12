"""
Script: rust_image_tools/common.py
What: Shared helper functions used by all `rust_image_tools` modules.
Doing: Wraps env reads, command execution with a command trace, and directory checks.
Why: Avoids duplicated helper code.
Goal: Keep behavior consistent across all helper modules.
"""

from __future__ import annotations

import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Sequence


class CiToolError(RuntimeError):
    """Raised when a helper script hits a known error condition."""

    # Process exit status used by the CLI entry points.
    exit_code = 1


class UsageError(CiToolError):
    """Raised when the operator called a command with missing arguments."""

    exit_code = 2


class CommandFailedError(CiToolError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, message: str, returncode: int) -> None:
        super().__init__(message)
        self.returncode = returncode
        # A negative return code means the child was killed by a signal;
        # report it the way a shell does (128 + signal number).
        self.exit_code = returncode if returncode > 0 else 128 - returncode


def optional_env(name: str, default: str = "") -> str:
    """Return an environment variable with a fallback default."""
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return value


def format_cmd(args: Sequence[str]) -> str:
    """Render a command the way a shell trace would show it."""
    return " ".join(shlex.quote(str(arg)) for arg in args)


def trace(line: str) -> None:
    """
    Print one trace line, similar to what `set -x` shows.

    Flushing matters because child processes write to the same stdout; without
    it the trace line could show up after the child's output.
    """
    print(f"+ {line}", flush=True)


def require_dir(path: Path) -> Path:
    """Return `path` when it is an existing directory, otherwise raise."""
    if not path.is_dir():
        raise CiToolError(f"Could not enter directory: {path}")
    return path


def run_cmd(
    args: Sequence[str],
    *,
    capture_output: bool = True,
    cwd: str | None = None,
    echo: bool = False,
) -> str:
    """
    Run a command and return stdout, raising a readable error on failure.

    With `echo=True` the command is traced before it runs. The raised
    `CommandFailedError` keeps the child's return code so callers can exit
    with the same status.
    """
    if echo:
        trace(format_cmd(args))

    try:
        result = subprocess.run(
            list(args),
            check=True,
            text=True,
            capture_output=capture_output,
            cwd=cwd,
        )
    except FileNotFoundError as exc:
        raise CiToolError(f"Command not found: {args[0]}") from exc
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        stdout = (exc.stdout or "").strip()
        details = stderr or stdout
        message = f"Command failed with exit status {exc.returncode}: {format_cmd(args)}"
        if details:
            message = f"{message}\n{details}"
        raise CommandFailedError(message, exc.returncode) from exc

    if not capture_output:
        return ""
    return result.stdout


def exit_on_error(exc: CiToolError) -> None:
    """Print a known error to stderr and exit with its status."""
    # Keep failures short and readable in build logs.
    print(str(exc), file=sys.stderr)
    raise SystemExit(exc.exit_code) from exc

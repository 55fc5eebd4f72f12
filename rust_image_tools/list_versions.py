"""
Script: rust_image_tools/list_versions.py
What: Lists Rust versions that can be built from the local `images/` tree.
Doing: Intersects the version directories under `images/build/` and `images/runtime/`.
Why: Operators need to know which versions `build-images` accepts without browsing directories.
Goal: Print one buildable version per line, sorted.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from rust_image_tools.build_images import DEFAULT_IMAGES_ROOT
from rust_image_tools.common import CiToolError, exit_on_error


def buildable_versions(images_root: Path) -> list[str]:
    """
    Return Rust versions that have both a build and a runtime image directory.

    A version with only one of the two cannot be built by `build_images`, so it
    is left out.
    """
    if not images_root.is_dir():
        raise CiToolError(f"Images directory not found: {images_root}")

    def _version_dirs(kind: str) -> set[str]:
        kind_dir = images_root / kind
        if not kind_dir.is_dir():
            return set()
        return {entry.name for entry in kind_dir.iterdir() if entry.is_dir()}

    return sorted(_version_dirs("build") & _version_dirs("runtime"))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="python3 -m rust_image_tools.list_versions",
        description="List Rust versions that have build and runtime image directories.",
    )
    parser.add_argument("--images-root", default=DEFAULT_IMAGES_ROOT)
    args = parser.parse_args(argv)

    try:
        versions = buildable_versions(Path(args.images_root))
    except CiToolError as exc:
        exit_on_error(exc)

    for version in versions:
        print(version)


if __name__ == "__main__":
    main()

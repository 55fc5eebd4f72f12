"""
Script: rust_image_tools/build_images.py
What: Builds the Rust function build, runtime and init images for one Rust version.
Doing: Validates the version argument, then runs `docker build` in each image directory in order.
Why: Replaces the old `build_image.sh` with a helper that can be tested without Docker.
Goal: Produce `<namespace>/rust:<version>-build`, `<namespace>/rust:<version>-rt` and `<namespace>/rust:init`.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import partial
from pathlib import Path

from rust_image_tools.common import (
    CiToolError,
    UsageError,
    exit_on_error,
    format_cmd,
    optional_env,
    require_dir,
    run_cmd,
    trace,
)


DEFAULT_NAMESPACE = "fnproject"
DEFAULT_DOCKER = "docker"
DEFAULT_IMAGES_ROOT = "images"
IMAGE_REPOSITORY = "rust"
INIT_TAG = "init"

USAGE_MESSAGE = "Please supply Rust version as argument to build image."


@dataclass(frozen=True)
class BuildStep:
    """One `docker build` call: where to run it and which tag to produce."""

    name: str
    context_dir: Path
    tag: str


Builder = Callable[[BuildStep], None]


def image_tag(namespace: str, tag: str) -> str:
    """Return a full image reference such as `fnproject/rust:1.45.0-rt`."""
    return f"{namespace}/{IMAGE_REPOSITORY}:{tag}"


def plan_build_steps(
    version: str | None,
    *,
    namespace: str = DEFAULT_NAMESPACE,
    images_root: str | Path = DEFAULT_IMAGES_ROOT,
) -> list[BuildStep]:
    """
    Return the three build steps for one Rust version, in build order.

    The version is used verbatim; only an absent or empty value is rejected.
    The init image does not depend on the version, so its tag never changes.
    """
    if not version:
        raise UsageError(USAGE_MESSAGE)

    root = Path(images_root)
    return [
        BuildStep(
            name="build",
            context_dir=root / "build" / version,
            tag=image_tag(namespace, f"{version}-build"),
        ),
        BuildStep(
            name="runtime",
            context_dir=root / "runtime" / version,
            tag=image_tag(namespace, f"{version}-rt"),
        ),
        BuildStep(
            name="init",
            context_dir=root / "init",
            tag=image_tag(namespace, INIT_TAG),
        ),
    ]


def docker_build_args(step: BuildStep, *, docker: str = DEFAULT_DOCKER) -> list[str]:
    """Return the builder command line; it always runs inside the context dir."""
    return [docker, "build", "-t", step.tag, "."]


def docker_build(step: BuildStep, *, docker: str = DEFAULT_DOCKER) -> None:
    """
    Run one image build inside the step's context directory.

    The child gets the context directory as its working directory, so the
    working directory of this process never changes, even when a build fails.
    """
    context_dir = require_dir(step.context_dir)
    trace(f"cd {context_dir}")
    run_cmd(
        docker_build_args(step, docker=docker),
        cwd=str(context_dir),
        capture_output=False,
        echo=True,
    )


def dry_run_builder(*, docker: str = DEFAULT_DOCKER) -> Builder:
    """Return a builder that only prints what `docker_build` would run."""

    def _print_only(step: BuildStep) -> None:
        trace(f"cd {step.context_dir}")
        trace(format_cmd(docker_build_args(step, docker=docker)))

    return _print_only


def run_build_steps(steps: Iterable[BuildStep], *, builder: Builder = docker_build) -> None:
    """
    Run build steps strictly in order.

    The first failure propagates unchanged; later steps never run and nothing
    already built is cleaned up.
    """
    for step in steps:
        builder(step)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python3 -m rust_image_tools.build_images",
        description="Build the Rust build, runtime and init images for one Rust version.",
    )
    # Optional here so a missing version gets our own message and exit status.
    parser.add_argument("rust_version", nargs="?", metavar="rust-version")
    parser.add_argument(
        "--namespace",
        default=optional_env("RUST_IMAGE_NAMESPACE", DEFAULT_NAMESPACE),
        help="image namespace (default: %(default)s)",
    )
    parser.add_argument(
        "--docker",
        default=optional_env("DOCKER_BIN", DEFAULT_DOCKER),
        help="image build tool to invoke (default: %(default)s)",
    )
    parser.add_argument(
        "--images-root",
        default=DEFAULT_IMAGES_ROOT,
        help="directory holding build/, runtime/ and init/ (default: %(default)s)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="print the commands without running them",
    )
    return parser


def build_images(argv: list[str] | None = None, *, builder: Builder | None = None) -> None:
    """
    Parse arguments and run the full build.

    `builder` is only passed by tests; by default the `--docker` tool is used.
    """
    args, extra = build_parser().parse_known_args(argv)
    # Extra positionals are ignored. A version starting with `-` (for example
    # `-rc`) is not a known flag, so it lands in `extra`; use it verbatim.
    if args.rust_version is None and extra:
        args.rust_version = extra[0]

    steps = plan_build_steps(
        args.rust_version,
        namespace=args.namespace,
        images_root=args.images_root,
    )

    if builder is None:
        if args.dry_run:
            builder = dry_run_builder(docker=args.docker)
        else:
            builder = partial(docker_build, docker=args.docker)

    run_build_steps(steps, builder=builder)
    if args.dry_run:
        print(f"Dry run: {len(steps)} images would be built for Rust {args.rust_version}")
    else:
        print(f"Built {len(steps)} images for Rust {args.rust_version}")


def main(argv: list[str] | None = None, *, builder: Builder | None = None) -> None:
    try:
        build_images(argv, builder=builder)
    except CiToolError as exc:
        exit_on_error(exc)


if __name__ == "__main__":
    main()

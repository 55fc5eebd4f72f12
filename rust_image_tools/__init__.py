"""
Script: rust_image_tools package
What: Holds Python helpers that replaced the old `build_image.sh` script.
Doing: Groups CLI entrypoints and shared utility code in one importable package.
Why: Keeps image build logic readable and testable instead of living in a shell file.
Goal: Provide a clear, maintainable home for Rust function image builds.
"""

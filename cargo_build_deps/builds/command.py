"""Cargo command composition.

This module handles:
- The build options shared by the plan query and the scoped build
- Composing the ``cargo build --build-plan`` query
- Composing the ``cargo build -p ...`` invocation scoped to dependencies

Commands are returned without the cargo executable; the runner prepends it.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from cargo_build_deps.plan.version import Package


class BuildOptions(BaseModel):
    """User-level options threaded through to cargo.

    Attributes:
        release: Build with the release profile.
        target: Target triple to build for.
        manifest_path: Manifest of the package (or member) to build.
        include_tests: Plan the build including test targets.
        verbose: Pass --verbose to the scoped build.
        debug: Report constructed commands before running them.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    release: bool = False
    target: str | None = Field(default=None, min_length=1)
    manifest_path: Path | None = None
    include_tests: bool = False
    verbose: bool = False
    debug: bool = False


def compose_plan_command(options: BuildOptions) -> list[str]:
    """Compose the build plan query.

    The plan is requested with the same profile and target as the scoped
    build so that the versions it lists are the ones that will be built.

    Args:
        options: Build options.

    Returns:
        Cargo arguments as a list of strings.
    """
    cmd = ["build", "--build-plan", "-Z", "unstable-options"]

    if options.release:
        cmd.append("--release")

    if options.target:
        cmd.extend(["--target", options.target])

    if options.include_tests:
        cmd.append("--tests")

    if options.manifest_path is not None:
        cmd.extend(["--manifest-path", str(options.manifest_path)])

    return cmd


def compose_build_command(
    packages: Sequence[Package],
    options: BuildOptions,
) -> list[str]:
    """Compose the build invocation scoped to the given packages.

    With no packages the result is a plain, unscoped ``cargo build``.

    Args:
        packages: Packages to build, in the order they should be listed.
        options: Build options.

    Returns:
        Cargo arguments as a list of strings.
    """
    cmd = ["build"]

    if options.release:
        cmd.append("--release")

    if options.target:
        cmd.extend(["--target", options.target])

    if options.verbose:
        cmd.append("--verbose")

    if options.manifest_path is not None:
        cmd.extend(["--manifest-path", str(options.manifest_path)])

    for package in packages:
        cmd.extend(["-p", package.spec])

    return cmd


__all__ = ["BuildOptions", "compose_build_command", "compose_plan_command"]

"""Dependency build service.

This module provides the high-level API:
- list_dependencies(): plan query, parse and extraction only
- build_dependencies(): plan phase followed by the scoped build
- build_workspace_dependencies(): the same, once per workspace member

Every phase runs to completion before the next starts, and the first failure
stops the run.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from cargo_build_deps.builds.command import (
    BuildOptions,
    compose_build_command,
    compose_plan_command,
)
from cargo_build_deps.builds.runner import (
    BuildExecutionError,
    query_build_plan,
    run_command,
)
from cargo_build_deps.config import get_settings
from cargo_build_deps.plan.extract import extract_dependencies
from cargo_build_deps.plan.schema import parse_build_plan
from cargo_build_deps.workspace import member_manifest_paths, read_workspace_members

if TYPE_CHECKING:
    from cargo_build_deps.config import Settings
    from cargo_build_deps.plan.version import Package
    from cargo_build_deps.types import CommandOutcome

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]


def _announce(command: list[str], options: BuildOptions, echo: Echo | None) -> None:
    if options.debug and echo is not None:
        echo(f"[debug] Running command '{shlex.join(command)}'...")


def package_dir(options: BuildOptions, cwd: Path) -> Path:
    """Directory cargo compiles the package under development from.

    Without a manifest path that is ``cwd``; otherwise it is the directory
    holding the manifest, which cargo uses as the package's working directory.
    """
    if options.manifest_path is None:
        return cwd
    return (cwd / options.manifest_path).resolve().parent


def list_dependencies(
    options: BuildOptions,
    cwd: Path,
    settings: Settings | None = None,
    echo: Echo | None = None,
    package_root: Path | None = None,
) -> list[Package]:
    """Query the build plan and extract the external packages from it.

    Args:
        options: Build options shaping the plan query.
        cwd: Current working directory.
        settings: Optional settings; loaded from the environment if omitted.
        echo: Sink for user-facing messages.
        package_root: Directory cargo compiles the package under development
            from; derived with package_dir() if omitted.

    Returns:
        Deduplicated packages sorted by name.

    Raises:
        PlanQueryError: If cargo fails to produce a plan.
        PlanParseError: If the plan output is malformed.
        VersionParseError: If a package version is not SemVer.
    """
    if settings is None:
        settings = get_settings()

    plan_cmd = compose_plan_command(options)
    _announce([settings.cargo, *plan_cmd], options, echo)
    raw = query_build_plan(plan_cmd, cargo=settings.cargo)

    plan = parse_build_plan(raw)
    if package_root is None:
        package_root = package_dir(options, cwd)
    return extract_dependencies(plan, package_root)


def build_dependencies(
    options: BuildOptions,
    cwd: Path,
    settings: Settings | None = None,
    echo: Echo | None = None,
    package_root: Path | None = None,
) -> CommandOutcome:
    """Build the external dependencies of one package.

    Args:
        options: Build options.
        cwd: Current working directory.
        settings: Optional settings; loaded from the environment if omitted.
        echo: Sink for user-facing messages.
        package_root: Directory cargo compiles the package under development
            from; derived with package_dir() if omitted.

    Returns:
        Outcome of the successful scoped build.

    Raises:
        PlanQueryError, PlanParseError, VersionParseError: From the plan phase.
        BuildExecutionError: If the scoped build fails or cannot start.
    """
    if settings is None:
        settings = get_settings()

    packages = list_dependencies(
        options, cwd, settings=settings, echo=echo, package_root=package_root
    )
    if not packages:
        logger.info("No external dependencies found; running an unscoped build")

    build_cmd = compose_build_command(packages, options)
    _announce([settings.cargo, *build_cmd], options, echo)
    outcome = run_command(build_cmd, cargo=settings.cargo)

    if not outcome.success:
        raise BuildExecutionError.from_outcome(outcome)
    return outcome


def build_workspace_dependencies(
    options: BuildOptions,
    cwd: Path,
    settings: Settings | None = None,
    echo: Echo | None = None,
) -> list[CommandOutcome]:
    """Build the external dependencies of every workspace member.

    Members are processed in manifest order, one at a time. The manifest
    path in ``options`` is replaced per member. Cargo compiles workspace
    members from the workspace root, so extraction compares against ``cwd``.

    Args:
        options: Build options.
        cwd: Workspace root directory.
        settings: Optional settings; loaded from the environment if omitted.
        echo: Sink for user-facing messages.

    Returns:
        One outcome per member.

    Raises:
        WorkspaceError: If the workspace manifest is unreadable or malformed.
        BuildDepsError: The first failure of any member.
    """
    if settings is None:
        settings = get_settings()

    members = read_workspace_members(cwd / settings.manifest_name)
    manifests = member_manifest_paths(cwd, members, settings.manifest_name)

    outcomes: list[CommandOutcome] = []
    for member, manifest in zip(members, manifests):
        if echo is not None:
            echo(f"[info] Building dependencies of workspace member '{member}'...")
        member_options = options.model_copy(update={"manifest_path": manifest})
        outcomes.append(
            build_dependencies(
                member_options,
                cwd,
                settings=settings,
                echo=echo,
                package_root=cwd,
            )
        )
        if echo is not None:
            echo("[info] => DONE")
    return outcomes


__all__ = [
    "Echo",
    "build_dependencies",
    "build_workspace_dependencies",
    "list_dependencies",
    "package_dir",
]

"""Dependency extraction from build plans.

Turns a parsed build plan into the list of external packages to prebuild:
- Drops steps without a compiler run (empty ``args``)
- Drops steps run from the current directory (the package being developed)
- Collapses repeated packages to their highest version
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path, PurePath

from cargo_build_deps.plan.schema import BuildPlan, Invocation
from cargo_build_deps.plan.version import Package

logger = logging.getLogger(__name__)


def is_external(invocation: Invocation, cwd: PurePath) -> bool:
    """Whether an invocation compiles an external dependency.

    Args:
        invocation: Planned invocation.
        cwd: Current working directory of the caller.

    Returns:
        True if the step runs a compiler outside ``cwd``.
    """
    return bool(invocation.args) and PurePath(invocation.cwd) != cwd


def dedupe_highest(packages: Iterable[Package]) -> list[Package]:
    """Keep one entry per package name, at its highest version.

    Args:
        packages: Packages in any order, possibly repeated.

    Returns:
        One package per name, sorted by name.
    """
    latest: dict[str, Package] = {}
    # Ascending (name, version): the last one seen per name wins.
    for package in sorted(packages):
        latest[package.name] = package
    return [latest[name] for name in sorted(latest)]


def extract_dependencies(plan: BuildPlan, cwd: Path | str) -> list[Package]:
    """Compute the external packages a build plan needs prebuilt.

    Args:
        plan: Parsed build plan.
        cwd: Directory of the package under development.

    Returns:
        Deduplicated packages sorted by name.

    Raises:
        VersionParseError: If an invocation carries a non-SemVer version.
    """
    current = PurePath(cwd)
    candidates = [
        Package.from_env(inv.env.name, inv.env.version)
        for inv in plan.invocations
        if is_external(inv, current)
    ]
    packages = dedupe_highest(candidates)
    logger.debug(
        "Extracted %d package(s) from %d invocation(s)",
        len(packages),
        len(plan.invocations),
    )
    return packages


__all__ = ["dedupe_highest", "extract_dependencies", "is_external"]

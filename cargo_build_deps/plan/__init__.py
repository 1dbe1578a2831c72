"""Build plan handling.

This module handles:
- Parsing Cargo build plan JSON
- Package identity and SemVer precedence
- Extracting the external packages to prebuild
"""

from cargo_build_deps.plan.extract import extract_dependencies
from cargo_build_deps.plan.schema import BuildPlan, Invocation, parse_build_plan
from cargo_build_deps.plan.version import Package, Version

__all__ = [
    "BuildPlan",
    "Invocation",
    "Package",
    "Version",
    "extract_dependencies",
    "parse_build_plan",
]

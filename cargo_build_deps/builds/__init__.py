"""Build orchestration module.

This module handles:
- Composing plan queries and scoped build commands
- Running cargo child processes
- Sequencing the plan and build phases, per package or per workspace member
"""

from cargo_build_deps.builds.command import BuildOptions

__all__ = ["BuildOptions"]

# Submodules are imported explicitly: cargo_build_deps.builds.service, etc.

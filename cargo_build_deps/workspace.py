"""Cargo workspace manifest reading.

Reads ``[workspace] members`` from a Cargo manifest and resolves each member
to the manifest path its dependencies are built from.
"""

import logging
import tomllib
from pathlib import Path

from cargo_build_deps.types import BuildDepsError, ErrorCode

logger = logging.getLogger(__name__)


class WorkspaceError(BuildDepsError):
    """Raised when a workspace manifest cannot be read or is malformed."""

    def __init__(self, message: str, manifest: Path) -> None:
        super().__init__(message, ErrorCode.WORKSPACE_INVALID)
        self.manifest = manifest


def read_workspace_members(manifest: Path) -> list[str]:
    """Return the workspace members listed in a manifest, in order.

    Args:
        manifest: Path to the workspace root manifest.

    Returns:
        Member paths exactly as written in the manifest.

    Raises:
        WorkspaceError: If the file is missing, is not valid TOML, or has no
            ``workspace.members`` list of strings.
    """
    try:
        with open(manifest, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise WorkspaceError(f"Cannot read manifest {manifest}: {e}", manifest) from e
    except tomllib.TOMLDecodeError as e:
        raise WorkspaceError(f"Invalid TOML in {manifest}: {e}", manifest) from e

    workspace = data.get("workspace")
    if not isinstance(workspace, dict):
        raise WorkspaceError(f"No [workspace] table in {manifest}", manifest)

    members = workspace.get("members")
    if not isinstance(members, list) or not all(isinstance(m, str) for m in members):
        raise WorkspaceError(
            f"workspace.members in {manifest} must be a list of strings", manifest
        )

    logger.debug("Workspace %s has %d member(s)", manifest, len(members))
    return members


def member_manifest_paths(
    cwd: Path,
    members: list[str],
    manifest_name: str = "Cargo.toml",
) -> list[Path]:
    """Resolve workspace members to their manifest paths.

    Args:
        cwd: Workspace root directory.
        members: Member paths relative to ``cwd``.
        manifest_name: Manifest filename inside each member.

    Returns:
        One manifest path per member, in member order.
    """
    return [cwd / member / manifest_name for member in members]


__all__ = ["WorkspaceError", "member_manifest_paths", "read_workspace_members"]

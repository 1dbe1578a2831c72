"""Shared type definitions for cargo_build_deps.

This module contains the error base class, stable error codes and result
dataclasses shared across subpackages to avoid circular imports.
"""

from dataclasses import dataclass, field
from enum import Enum


class ErrorCode(str, Enum):
    """Stable codes for every failure the tool can report."""

    PLAN_QUERY_FAILED = "plan_query_failed"
    PLAN_PARSE_FAILED = "plan_parse_failed"
    VERSION_PARSE_FAILED = "version_parse_failed"
    BUILD_FAILED = "build_failed"
    WORKSPACE_INVALID = "workspace_invalid"


class BuildDepsError(Exception):
    """Base error for all fatal cargo_build_deps failures."""

    def __init__(self, message: str, code: ErrorCode) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


@dataclass
class CommandOutcome:
    """Result of running a child process to completion.

    Attributes:
        command: Full argument vector that was executed.
        returncode: Exit code, or None if the process was killed by a signal.
        signal: Terminating signal number, if any.
    """

    command: list[str] = field(default_factory=list)
    returncode: int | None = None
    signal: int | None = None

    @property
    def success(self) -> bool:
        """Whether the process exited normally with status 0."""
        return self.returncode == 0

    def describe(self) -> str:
        """Human-readable summary of how the process ended."""
        if self.signal is not None:
            return f"Process terminated by signal {self.signal}"
        return f"Exited with status code: {self.returncode}"


__all__ = ["BuildDepsError", "CommandOutcome", "ErrorCode"]

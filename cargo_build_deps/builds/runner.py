"""Runner for cargo child processes.

This module handles:
- Querying cargo for a build plan with captured output
- Executing builds with inherited stdio and environment
- Mapping exit statuses and signals to CommandOutcome
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence

from cargo_build_deps.types import BuildDepsError, CommandOutcome, ErrorCode

logger = logging.getLogger(__name__)


class PlanQueryError(BuildDepsError):
    """Raised when cargo fails to produce a build plan."""

    def __init__(
        self,
        message: str,
        stderr: str = "",
        exit_code: int | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.PLAN_QUERY_FAILED)
        self.stderr = stderr
        self.exit_code = exit_code


class BuildExecutionError(BuildDepsError):
    """Raised when a build cannot be started or does not succeed."""

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        signal: int | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.BUILD_FAILED)
        self.exit_code = exit_code
        self.signal = signal

    @classmethod
    def from_outcome(cls, outcome: CommandOutcome) -> BuildExecutionError:
        """Create an error describing a failed CommandOutcome."""
        return cls(
            outcome.describe(),
            exit_code=outcome.returncode,
            signal=outcome.signal,
        )


def query_build_plan(command: Sequence[str], cargo: str = "cargo") -> bytes:
    """Run a build plan query and return its raw stdout.

    Args:
        command: Cargo arguments, e.g. from compose_plan_command().
        cargo: Cargo executable.

    Returns:
        Raw plan output, left undecoded.

    Raises:
        PlanQueryError: If cargo cannot be run or exits non-zero.
    """
    cmd = [cargo, *command]
    logger.info("Querying build plan: %s", shlex.join(cmd))

    try:
        result = subprocess.run(cmd, capture_output=True, check=True)
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or b"").decode("utf-8", errors="replace")
        raise PlanQueryError(
            stderr or f"Build plan query failed with exit code {e.returncode}",
            stderr=stderr,
            exit_code=e.returncode,
        ) from e
    except OSError as e:
        raise PlanQueryError(f"Failed to run {cargo}: {e}") from e

    return result.stdout


def run_command(command: Sequence[str], cargo: str = "cargo") -> CommandOutcome:
    """Run cargo to completion with inherited stdio and environment.

    Args:
        command: Cargo arguments, e.g. from compose_build_command().
        cargo: Cargo executable.

    Returns:
        CommandOutcome with the exit code or terminating signal.

    Raises:
        BuildExecutionError: If the process cannot be started.
    """
    cmd = [cargo, *command]
    logger.info("Executing build: %s", shlex.join(cmd))

    try:
        result = subprocess.run(cmd, check=False)
    except OSError as e:
        error_message = f"Failed to execute build: {e}"
        logger.error(error_message)
        raise BuildExecutionError(error_message) from e

    # subprocess reports death by signal N as returncode -N
    if result.returncode < 0:
        outcome = CommandOutcome(command=cmd, signal=-result.returncode)
    else:
        outcome = CommandOutcome(command=cmd, returncode=result.returncode)

    if not outcome.success:
        logger.error("Build failed: %s", outcome.describe())
    return outcome


__all__ = [
    "BuildExecutionError",
    "PlanQueryError",
    "query_build_plan",
    "run_command",
]

"""Pydantic models for Cargo build plans.

A build plan is what ``cargo build --build-plan -Z unstable-options``
prints: a JSON object with an ``invocations`` array describing every
compiler run a full build would perform. Only the fields needed to tell
dependencies apart from the package under development are modelled; the
rest of Cargo's output (``outputs``, ``deps``, ``links``, ...) is ignored.

Validation is strict: values are never coerced, and any missing or
mistyped field fails the whole plan.
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cargo_build_deps.types import BuildDepsError, ErrorCode

PKG_NAME_KEY = "CARGO_PKG_NAME"
PKG_VERSION_KEY = "CARGO_PKG_VERSION"


class PlanParseError(BuildDepsError):
    """Raised when build plan output cannot be decoded or validated."""

    def __init__(self, message: str, location: str | None = None) -> None:
        super().__init__(message, ErrorCode.PLAN_PARSE_FAILED)
        self.location = location


class InvocationEnv(BaseModel):
    """Package identity taken from an invocation's environment.

    Attributes:
        name: Value of CARGO_PKG_NAME.
        version: Value of CARGO_PKG_VERSION (unparsed).
    """

    model_config = ConfigDict(
        extra="ignore", frozen=True, strict=True, populate_by_name=True
    )

    name: str = Field(alias=PKG_NAME_KEY, min_length=1)
    version: str = Field(alias=PKG_VERSION_KEY, min_length=1)


class Invocation(BaseModel):
    """One planned compiler invocation.

    Attributes:
        args: Arguments the step runs with; empty for steps without a
            compiler run.
        cwd: Working directory of the step.
        env: Package identity of the step.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, strict=True)

    args: list[str]
    cwd: str = Field(min_length=1)
    env: InvocationEnv


class BuildPlan(BaseModel):
    """A full build plan, invocations in the order Cargo would run them."""

    model_config = ConfigDict(extra="ignore", frozen=True, strict=True)

    invocations: list[Invocation]


def _format_location(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc)


def parse_build_plan(raw: bytes | str) -> BuildPlan:
    """Parse build plan output into a BuildPlan.

    Args:
        raw: Plan output as bytes (decoded as UTF-8) or text.

    Returns:
        Validated BuildPlan.

    Raises:
        PlanParseError: If the output is not UTF-8, not JSON, or does not
            match the build plan schema.
    """
    if isinstance(raw, bytes):
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise PlanParseError(
                f"Build plan is not valid UTF-8 (byte offset {e.start})"
            ) from e
    else:
        text = raw

    try:
        return BuildPlan.model_validate_json(text)
    except ValidationError as e:
        first = e.errors()[0]
        location = _format_location(first["loc"])
        if location:
            message = f"Invalid build plan at '{location}': {first['msg']}"
        else:
            message = f"Invalid build plan: {first['msg']}"
        if e.error_count() > 1:
            message += f" (and {e.error_count() - 1} more error(s))"
        raise PlanParseError(message, location=location or None) from e


__all__ = [
    "PKG_NAME_KEY",
    "PKG_VERSION_KEY",
    "BuildPlan",
    "Invocation",
    "InvocationEnv",
    "PlanParseError",
    "parse_build_plan",
]

"""Package identity and semantic versions.

Cargo package versions follow Semantic Versioning 2.0.0. Ordering here
implements SemVer precedence exactly (pre-release identifiers included,
build metadata ignored), which is what "newest version" means when the same
package shows up several times in a build plan.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering

from cargo_build_deps.types import BuildDepsError, ErrorCode

# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
SEMVER_PATTERN = re.compile(
    r"(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)"
    r"(?:-((?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?",
    re.ASCII,
)


class VersionParseError(BuildDepsError):
    """Raised when a version string is not valid SemVer."""

    def __init__(self, text: str) -> None:
        super().__init__(
            f"Invalid semantic version: {text!r}",
            ErrorCode.VERSION_PARSE_FAILED,
        )
        self.text = text


def _identifier_key(identifier: str) -> tuple[int, int, str]:
    # Numeric identifiers sort numerically and below alphanumeric ones.
    if identifier.isdigit():
        return (0, int(identifier), "")
    return (1, 0, identifier)


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A parsed semantic version.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        patch: Patch version number.
        prerelease: Dot-separated pre-release identifiers.
        build: Dot-separated build metadata identifiers.
        text: The version exactly as written.
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = field(default=())
    build: tuple[str, ...] = field(default=())
    text: str = ""

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a SemVer 2.0.0 string.

        Args:
            text: Version string, e.g. ``1.2.3-beta.1+build.5``.

        Returns:
            Parsed Version.

        Raises:
            VersionParseError: If the string is not valid SemVer.
        """
        match = SEMVER_PATTERN.fullmatch(text)
        if match is None:
            raise VersionParseError(text)
        major, minor, patch, prerelease, build = match.groups()
        return cls(
            major=int(major),
            minor=int(minor),
            patch=int(patch),
            prerelease=tuple(prerelease.split(".")) if prerelease else (),
            build=tuple(build.split(".")) if build else (),
            text=text,
        )

    def precedence_key(self) -> tuple:
        """Key implementing SemVer precedence; build metadata is ignored."""
        if self.prerelease:
            pre: tuple = (0, tuple(_identifier_key(i) for i in self.prerelease))
        else:
            # A release outranks any of its pre-releases.
            pre = (1, ())
        return (self.major, self.minor, self.patch, pre)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.precedence_key() == other.precedence_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.precedence_key() < other.precedence_key()

    def __hash__(self) -> int:
        return hash(self.precedence_key())

    def __str__(self) -> str:
        if self.text:
            return self.text
        rendered = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            rendered += "-" + ".".join(self.prerelease)
        if self.build:
            rendered += "+" + ".".join(self.build)
        return rendered


@total_ordering
@dataclass(frozen=True, eq=False)
class Package:
    """An external dependency selected for prebuilding.

    Packages order by name first, then by version precedence.
    """

    name: str
    version: Version

    @classmethod
    def from_env(cls, name: str, version: str) -> Package:
        """Build a Package from the name/version pair of an invocation env.

        Raises:
            VersionParseError: If ``version`` is not valid SemVer.
        """
        return cls(name=name, version=Version.parse(version))

    def sort_key(self) -> tuple:
        return (self.name, self.version.precedence_key())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Package):
            return NotImplemented
        return self.sort_key() == other.sort_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Package):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash(self.sort_key())

    @property
    def spec(self) -> str:
        """Package ID spec accepted by ``cargo build -p``."""
        return f"{self.name}:{self.version}"

    def __str__(self) -> str:
        return self.spec


__all__ = ["SEMVER_PATTERN", "Package", "Version", "VersionParseError"]

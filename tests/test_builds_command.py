"""Tests for builds/command.py module.

Tests plan query and scoped build command composition.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cargo_build_deps.builds.command import (
    BuildOptions,
    compose_build_command,
    compose_plan_command,
)
from cargo_build_deps.plan.version import Package


@pytest.fixture
def packages() -> list[Package]:
    """Packages as produced by the extractor."""
    return [Package.from_env("dep", "1.1.0"), Package.from_env("serde", "1.0.197")]


class TestBuildOptions:
    """Tests for BuildOptions model."""

    def test_defaults(self):
        """Should default every flag off."""
        options = BuildOptions()
        assert options.release is False
        assert options.target is None
        assert options.manifest_path is None
        assert options.include_tests is False
        assert options.verbose is False
        assert options.debug is False

    def test_rejects_unknown_option(self):
        """Should reject unknown fields."""
        with pytest.raises(ValidationError):
            BuildOptions(workspace=True)

    def test_rejects_empty_target(self):
        """Should reject an empty target triple."""
        with pytest.raises(ValidationError):
            BuildOptions(target="")


class TestComposePlanCommand:
    """Tests for compose_plan_command function."""

    def test_minimal_command(self):
        """Should request an unstable build plan."""
        assert compose_plan_command(BuildOptions()) == [
            "build",
            "--build-plan",
            "-Z",
            "unstable-options",
        ]

    def test_manifest_path(self):
        """Should pass the manifest path."""
        cmd = compose_plan_command(BuildOptions(manifest_path=Path("/ws/a/Cargo.toml")))
        assert cmd[-2:] == ["--manifest-path", "/ws/a/Cargo.toml"]

    def test_full_command(self):
        """Should mirror profile and target of the scoped build."""
        options = BuildOptions(
            release=True,
            target="aarch64-unknown-linux-gnu",
            include_tests=True,
            manifest_path=Path("Cargo.toml"),
            verbose=True,
        )
        assert compose_plan_command(options) == [
            "build",
            "--build-plan",
            "-Z",
            "unstable-options",
            "--release",
            "--target",
            "aarch64-unknown-linux-gnu",
            "--tests",
            "--manifest-path",
            "Cargo.toml",
        ]

    def test_verbose_not_passed(self):
        """Verbose output would pollute the captured plan."""
        assert "--verbose" not in compose_plan_command(BuildOptions(verbose=True))


class TestComposeBuildCommand:
    """Tests for compose_build_command function."""

    def test_release_and_target(self):
        """Should order flags as release, target, packages."""
        options = BuildOptions(release=True, target="x86_64-unknown-linux-gnu")
        cmd = compose_build_command([Package.from_env("dep", "1.1.0")], options)
        assert cmd == [
            "build",
            "--release",
            "--target",
            "x86_64-unknown-linux-gnu",
            "-p",
            "dep:1.1.0",
        ]

    def test_no_packages_is_unscoped(self):
        """Should fall back to a plain build without -p flags."""
        assert compose_build_command([], BuildOptions()) == ["build"]

    def test_one_flag_per_package(self, packages):
        """Should emit exactly one -p name:version per package."""
        cmd = compose_build_command(packages, BuildOptions())
        assert cmd.count("-p") == len(packages)
        assert cmd == ["build", "-p", "dep:1.1.0", "-p", "serde:1.0.197"]

    def test_full_order(self, packages):
        """Should place verbose and manifest path before the packages."""
        options = BuildOptions(
            release=True,
            target="wasm32-unknown-unknown",
            verbose=True,
            manifest_path=Path("/ws/member/Cargo.toml"),
            include_tests=True,
            debug=True,
        )
        assert compose_build_command(packages, options) == [
            "build",
            "--release",
            "--target",
            "wasm32-unknown-unknown",
            "--verbose",
            "--manifest-path",
            "/ws/member/Cargo.toml",
            "-p",
            "dep:1.1.0",
            "-p",
            "serde:1.0.197",
        ]

    def test_version_text_preserved(self):
        """Should pass pre-release and build metadata through unchanged."""
        pkg = Package.from_env("dep", "0.4.0-beta.1+git.1a2b")
        cmd = compose_build_command([pkg], BuildOptions())
        assert cmd[-1] == "dep:0.4.0-beta.1+git.1a2b"

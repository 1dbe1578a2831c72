"""cargo-build-deps - prebuild the external dependencies of a Cargo project.

This package splits a Cargo build into two phases: it asks Cargo for a build
plan, extracts the external packages from it, and builds exactly those
packages so the project itself can be compiled afterwards against warm
dependencies.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]

"""Entry point for ``python -m cargo_build_deps``."""

from cargo_build_deps.cli import app

app(prog_name="cargo-build-deps")

"""Thin CLI wrapper for cargo_build_deps.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.

Cargo runs external subcommands as ``cargo-build-deps build-deps ...``,
so the main command is named ``build-deps``.
"""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from cargo_build_deps import __version__
from cargo_build_deps.builds.command import BuildOptions
from cargo_build_deps.builds.runner import BuildExecutionError, PlanQueryError
from cargo_build_deps.config import Settings, get_settings, print_settings_json
from cargo_build_deps.types import BuildDepsError

app = typer.Typer(
    name="cargo-build-deps",
    help="Cargo Build Deps - build the dependencies of a Cargo project ahead of it",
    no_args_is_help=True,
)
console = Console()

ReleaseOption = Annotated[
    bool, typer.Option("--release", help="Build artifacts in release mode")
]
TargetOption = Annotated[
    str | None,
    typer.Option(
        "--target", "-t", metavar="TARGET", help="Target triple to build for"
    ),
]
TestsOption = Annotated[
    bool, typer.Option("--tests", help="Include dependencies of test targets")
]
ManifestOption = Annotated[
    Path | None,
    typer.Option("--manifest-path", help="Path to the package's Cargo.toml"),
]
DebugOption = Annotated[
    bool,
    typer.Option("--debug", "-d", help="Print cargo commands before running them"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"cargo-build-deps version {__version__}")
        raise typer.Exit()


def _setup_logging(settings: Settings, debug: bool) -> None:
    level = logging.DEBUG if debug else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _echo(message: str) -> None:
    console.print(message, markup=False, highlight=False, soft_wrap=True)


def _fail(error: BuildDepsError) -> typer.Exit:
    """Report a fatal error and return the matching Exit to raise."""
    if isinstance(error, PlanQueryError) and error.stderr:
        # cargo's own diagnostics, verbatim
        console.print(
            error.stderr,
            markup=False,
            highlight=False,
            soft_wrap=True,
            end="",
        )
        return typer.Exit(code=1)

    console.print(f"[red]Error ({error.code.value}): {escape(error.message)}[/red]")
    if isinstance(error, BuildExecutionError):
        if error.signal is not None:
            return typer.Exit(code=128 + error.signal)
        if error.exit_code:
            return typer.Exit(code=error.exit_code)
    return typer.Exit(code=1)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Cargo Build Deps - build the dependencies of a Cargo project ahead of it."""


@app.command("build-deps")
def build_deps(
    debug: DebugOption = False,
    release: ReleaseOption = False,
    workspace: Annotated[
        bool,
        typer.Option(
            "--workspace", "-w", help="Build dependencies of every workspace member"
        ),
    ] = False,
    target: TargetOption = None,
    tests: TestsOption = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Use verbose cargo output")
    ] = False,
    manifest_path: ManifestOption = None,
) -> None:
    """Build only the external dependencies of the current package.

    Queries cargo for a build plan, keeps the packages compiled outside the
    current directory, and builds exactly those with `cargo build -p`.
    """
    from cargo_build_deps.builds.service import (
        build_dependencies,
        build_workspace_dependencies,
    )

    if workspace and manifest_path is not None:
        console.print("[red]--workspace cannot be combined with --manifest-path[/red]")
        raise typer.Exit(code=2)

    settings = get_settings()
    _setup_logging(settings, debug)

    options = BuildOptions(
        release=release,
        target=target,
        manifest_path=manifest_path,
        include_tests=tests,
        verbose=verbose,
        debug=debug,
    )
    cwd = Path.cwd()

    try:
        if workspace:
            build_workspace_dependencies(options, cwd, settings=settings, echo=_echo)
        else:
            _echo("[info] Building dependencies...")
            build_dependencies(options, cwd, settings=settings, echo=_echo)
            _echo("[info] => DONE")
    except BuildDepsError as e:
        raise _fail(e) from None


@app.command("deps")
def deps(
    debug: DebugOption = False,
    release: ReleaseOption = False,
    target: TargetOption = None,
    tests: TestsOption = False,
    manifest_path: ManifestOption = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """List the external dependencies that build-deps would build."""
    from cargo_build_deps.builds.service import list_dependencies

    settings = get_settings()
    _setup_logging(settings, debug)

    options = BuildOptions(
        release=release,
        target=target,
        manifest_path=manifest_path,
        include_tests=tests,
        debug=debug,
    )

    try:
        packages = list_dependencies(
            options, Path.cwd(), settings=settings, echo=_echo
        )
    except BuildDepsError as e:
        raise _fail(e) from None

    if json_output:
        output = [{"name": p.name, "version": str(p.version)} for p in packages]
        console.print(
            json.dumps(output, indent=2),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        return

    if not packages:
        console.print("[yellow]No external dependencies found[/yellow]")
        return

    for package in packages:
        _echo(package.spec)


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        console.print(
            print_settings_json(settings),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
    else:
        console.print("[bold]Effective Configuration:[/bold]")
        console.print()
        console.print(f"  Cargo executable:    {escape(settings.cargo)}")
        console.print(f"  Manifest name:       {escape(settings.manifest_name)}")
        console.print(f"  Log level:           {settings.log_level}")

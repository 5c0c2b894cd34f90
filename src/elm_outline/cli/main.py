"""CLI entry point for elm-outline.

Invoked as::

    elm-outline [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m elm_outline.cli.main

Commands
--------
check       Read and validate the manifest of a project
show        Print the canonical encoding of a manifest
modules     List the exposed modules of a package
cache       Build or inspect a binary outline cache
version     Show version information
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from elm_outline.outline.nodes import Outline

console = Console()
err_console = Console(stderr=True)

_root_option = click.option(
    "--root",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Project directory containing elm.json",
)


def _read_or_exit(root: str) -> "Outline":
    """Read a project manifest, printing errors and exiting on failure."""
    from elm_outline.project import (
        OutlineHasBadSourceDirs,
        OutlineHasBadStructure,
        manifest_path,
        read,
    )

    try:
        return read(root)
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] No manifest found at {manifest_path(root)}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {manifest_path(root)}: {exc}")
        sys.exit(1)
    except OutlineHasBadStructure as exc:
        err_console.print(f"[red]Bad structure[/red] in {manifest_path(root)}:")
        err_console.print(f"  {exc.error}", markup=False)
        sys.exit(1)
    except OutlineHasBadSourceDirs as exc:
        err_console.print(f"[red]Missing source directories[/red] in {manifest_path(root)}:")
        for directory in exc.dirs:
            err_console.print(f"  {directory}", markup=False)
        sys.exit(1)


def _summary_table(outline: "Outline") -> Table:
    from elm_outline.outline import AppOutline

    table = Table(show_header=False, box=None)
    if isinstance(outline, AppOutline):
        table.add_row("[bold]type[/bold]", "application")
        table.add_row("elm-version", str(outline.elm_version))
        table.add_row("source-directories", ", ".join(outline.source_dirs))
        table.add_row("dependencies", f"{len(outline.deps_direct)} direct, {len(outline.deps_indirect)} indirect")
        table.add_row(
            "test-dependencies",
            f"{len(outline.test_direct)} direct, {len(outline.test_indirect)} indirect",
        )
    else:
        table.add_row("[bold]type[/bold]", "package")
        table.add_row("name", str(outline.name))
        table.add_row("version", str(outline.version))
        table.add_row("license", str(outline.license))
        table.add_row("elm-version", str(outline.elm_version))
        table.add_row("exposed-modules", str(len(outline.exposed_modules())))
        table.add_row("dependencies", str(len(outline.deps)))
        table.add_row("test-dependencies", str(len(outline.test_deps)))
    return table


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="elm-outline")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Parse, validate and cache elm.json project manifests."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from elm_outline import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]elm-outline[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@cli.command(name="check")
@_root_option
def check_command(root: str) -> None:
    """Read and validate the manifest of a project."""
    from elm_outline.project import manifest_path

    outline = _read_or_exit(root)
    console.print(_summary_table(outline))
    console.print(f"\n[green]OK[/green] {manifest_path(root)}")


# ---------------------------------------------------------------------------
# show command
# ---------------------------------------------------------------------------


@cli.command(name="show")
@_root_option
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output format",
)
def show_command(root: str, output_format: str) -> None:
    """Print the canonical encoding of a project manifest."""
    from elm_outline.outline import OutlineSerializer

    outline = _read_or_exit(root)
    serializer = OutlineSerializer()
    if output_format.lower() == "yaml":
        click.echo(serializer.to_yaml(outline), nl=False)
    else:
        click.echo(serializer.to_json(outline), nl=False)


# ---------------------------------------------------------------------------
# modules command
# ---------------------------------------------------------------------------


@cli.command(name="modules")
@_root_option
def modules_command(root: str) -> None:
    """List the exposed modules of a package, in order."""
    from elm_outline.outline import PkgOutline

    outline = _read_or_exit(root)
    if not isinstance(outline, PkgOutline):
        err_console.print("[red]Error:[/red] applications do not expose modules")
        sys.exit(1)
    for name in outline.exposed_modules():
        click.echo(name)


# ---------------------------------------------------------------------------
# cache commands
# ---------------------------------------------------------------------------


@cli.group(name="cache")
def cache_group() -> None:
    """Build or inspect a binary outline cache."""


@cache_group.command(name="build")
@_root_option
@click.option("--output", "-o", required=True, type=click.Path(dir_okay=False), help="Cache file to write")
def cache_build_command(root: str, output: str) -> None:
    """Read a manifest and write its binary cache."""
    from elm_outline.binary import write_cache

    outline = _read_or_exit(root)
    write_cache(Path(output), outline)
    console.print(f"[green]Wrote[/green] {output}")


@cache_group.command(name="show")
@click.argument("file", type=click.Path(dir_okay=False))
def cache_show_command(file: str) -> None:
    """Decode a binary cache and print it as manifest JSON."""
    from elm_outline.binary import CacheCorruptionError, read_cache
    from elm_outline.outline import OutlineSerializer

    try:
        outline = read_cache(Path(file))
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {file}: {exc}")
        sys.exit(1)
    except CacheCorruptionError as exc:
        err_console.print(f"[red]Fatal:[/red] {file}: {exc}")
        sys.exit(2)
    console.print(Syntax(OutlineSerializer().to_json(outline), "json"))


if __name__ == "__main__":
    cli()

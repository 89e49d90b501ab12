"""
Libforge CLI - Command-line interface for library generation

Usage:
    libforge library <name> [--directory DIR] [--service] [--controller] ...
    libforge version
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from libforge.errors import LibforgeError
from libforge.generator import GenerationResult, LibraryGenerator
from libforge.options import UnitTestRunner
from libforge.tree import ChangeKind, FileChange, VirtualTree

app = typer.Typer(
    name="libforge",
    help="Generate NestJS libraries inside an Nx-style workspace",
    add_completion=False,
)
console = Console()

CHANGE_STYLES = {
    ChangeKind.CREATE: "green",
    ChangeKind.UPDATE: "blue",
    ChangeKind.DELETE: "red",
}


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("library")
@app.command("lib", hidden=True)
def library(
    name: str = typer.Argument(..., help="Library name"),
    directory: Optional[str] = typer.Option(
        None, "--directory", "-d", help="Directory the library is placed in"
    ),
    tags: Optional[str] = typer.Option(
        None, "--tags", "-t", help="Comma-separated tags (used for linting)"
    ),
    unit_test_runner: Optional[UnitTestRunner] = typer.Option(
        None, "--unit-test-runner", help="Test runner for the library"
    ),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--no-strict", help="Enable stricter type checking"
    ),
    target: Optional[str] = typer.Option(None, "--target", help="Compiler target (default es6)"),
    controller: Optional[bool] = typer.Option(
        None, "--controller/--no-controller", help="Include a controller"
    ),
    service: Optional[bool] = typer.Option(
        None, "--service/--no-service", help="Include a service"
    ),
    is_global: Optional[bool] = typer.Option(
        None, "--global/--no-global", help="Mark the module as global"
    ),
    publishable: Optional[bool] = typer.Option(
        None, "--publishable/--no-publishable", help="Generate a publishable package"
    ),
    import_path: Optional[str] = typer.Option(
        None, "--import-path", help="Import path of a publishable library"
    ),
    workspace: Path = typer.Option(
        Path("."),
        "--workspace", "-w",
        help="Workspace root directory",
        exists=True,
        file_okay=False,
        resolve_path=True,
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be generated without writing files",
    ),
) -> None:
    """Generate a NestJS library and register it in the workspace."""
    raw: dict[str, Any] = {
        "name": name,
        "directory": directory,
        "tags": tags,
        "unitTestRunner": unit_test_runner,
        "strict": strict,
        "target": target,
        "controller": controller,
        "service": service,
        "global": is_global,
        "publishable": publishable,
        "importPath": import_path,
    }
    # Unset options fall back to libforge.yaml, then to built-in defaults
    options = {key: value for key, value in raw.items() if value is not None}

    tree = VirtualTree(workspace)
    try:
        result = LibraryGenerator().generate(tree, options)
    except LibforgeError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    changes = tree.changes()
    _show_changes(changes)

    if dry_run:
        rprint("\n[yellow]Dry run - no changes were written[/yellow]")
        return

    tree.commit()
    _show_summary(result)


@app.command()
def version() -> None:
    """Show version."""
    from libforge import __version__
    rprint(f"libforge {__version__}")


def _show_changes(changes: list[FileChange]) -> None:
    """Print one line per staged change."""
    for change in changes:
        style = CHANGE_STYLES[change.kind]
        console.print(f"[{style}]{change.kind.value.upper()}[/{style}] {change.path}")


def _show_summary(result: GenerationResult) -> None:
    """Show the generated project."""
    table = Table(title=f"Generated {result.project.id}")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Root", result.project.root)
    table.add_row("Import path", result.project.import_path)
    table.add_row("Test runner", result.directives.unit_test_runner.value)
    table.add_row("Tags", ", ".join(result.directives.tags) or "-")
    table.add_row("Files", str(len(result.files)))

    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()

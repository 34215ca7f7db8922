"""``dev ignore``: append technology patterns to a ``.gitignore``."""

from pathlib import Path
from typing import Optional

import typer

from .. import gitignore
from ..ui import console, error, heading, rule


def list_technologies() -> None:
    technologies = gitignore.available_technologies()
    if not technologies:
        console.print("\nNo ignore patterns available.")
        console.print(f"Pattern files should be placed in: {gitignore.IGNORE_DIR}\n")
        return
    heading("Available technologies:")
    for tech in technologies:
        console.print(f"  [cyan]{tech}[/cyan]")
    console.print("\nUsage: dev ignore <technology> [folder]\n")


def resolve_target(folder: Optional[str]) -> Path:
    if folder:
        target = Path(folder).expanduser().resolve()
        if not target.exists():
            error(f'Folder "{folder}" does not exist.')
            raise typer.Exit(1)
        if not target.is_dir():
            error(f'"{folder}" is not a directory.')
            raise typer.Exit(1)
        return target

    root = gitignore.find_git_root()
    if root is None:
        error("No git repository found.")
        console.print("Initialize with [cyan]git init[/cyan] or specify a folder path.")
        raise typer.Exit(1)
    return root


def ignore(
    technology: Optional[str] = typer.Argument(None, help="Technology name (e.g. node, python, macos)"),
    folder: Optional[str] = typer.Argument(None, help="Folder holding the .gitignore (defaults to the git root)"),
    list_all: bool = typer.Option(False, "--list", help="List all available technologies"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be added without modifying files"),
    force: bool = typer.Option(False, "--force", help="Replace the section if it already exists"),
    verbose: bool = typer.Option(False, "--verbose", help="Show the patterns that were added"),
):
    """Append technology-specific patterns to .gitignore."""
    if list_all:
        list_technologies()
        return

    if not technology:
        error("No technology specified.")
        console.print("Usage: dev ignore <technology> [folder]")
        console.print("Run [cyan]dev ignore --list[/cyan] to see available options.")
        raise typer.Exit(1)

    if technology not in gitignore.available_technologies():
        error(f'Unknown technology "{technology}".')
        console.print("Run [cyan]dev ignore --list[/cyan] to see available options.")
        raise typer.Exit(1)

    target = resolve_target(folder)
    path = target / ".gitignore"
    content = path.read_text(encoding="utf-8") if path.exists() else ""

    if gitignore.has_patterns(content, technology):
        if not force:
            console.print(f"\nPatterns for [cyan]{technology}[/cyan] already present in .gitignore")
            console.print("Use --force to replace existing patterns.\n")
            return
        content = gitignore.remove_patterns(content, technology)
        console.print(f"Replacing existing patterns for {technology}...")

    patterns = gitignore.read_patterns(technology)

    if dry_run:
        console.print(f"\n[Dry run] Would append to {path}:", markup=False)
        rule()
        console.print(gitignore.build_section(technology, patterns), markup=False, highlight=False)
        rule()
        return

    path.write_text(gitignore.add_patterns(content, technology, patterns), encoding="utf-8")
    console.print(f"\n[green]Added {technology} patterns to {path}[/green]")

    if verbose:
        heading("Patterns added:")
        console.print(patterns, markup=False, highlight=False)

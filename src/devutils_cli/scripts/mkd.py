"""``mkd``: create a directory (with parents) and show how to enter it."""

from pathlib import Path

import typer

from ..ui import console, error


def mkd(path: str = typer.Argument(..., help="Directory to create")):
    """Create a directory, including missing parents."""
    target = Path(path).expanduser()
    if target.exists() and not target.is_dir():
        error(f"A file with that name already exists: {target}")
        raise typer.Exit(1)

    if target.is_dir():
        console.print(f"Directory already exists: {target}", highlight=False)
    else:
        try:
            target.mkdir(parents=True)
        except OSError as exc:
            error(f"Could not create {target}: {exc}")
            raise typer.Exit(1)
        console.print(f"Created directory: {target}", highlight=False)

    # a child process cannot change the parent shell's directory
    console.print(f'To navigate there, run: cd "{target}"', highlight=False)

"""``path``: print each PATH entry on its own line."""

import os

import typer

from ..ui import console


def path_entries(value: str) -> list[str]:
    return [entry for entry in value.split(os.pathsep) if entry]


def path():
    """Print the PATH entries, one per line."""
    entries = path_entries(os.environ.get("PATH", ""))
    if not entries:
        console.print("PATH environment variable is not set or empty.")
        return
    for entry in entries:
        typer.echo(entry)

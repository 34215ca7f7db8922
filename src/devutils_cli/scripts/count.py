"""``count``, ``count-files``, ``count-folders``: entries directly inside a directory."""

from pathlib import Path

import typer

from ..ui import error

DIRECTORY_ARGUMENT = typer.Argument(Path("."), help="Directory to inspect (default: current)")


def count_entries(directory: Path) -> tuple[int, int]:
    """Return ``(files, folders)`` among the immediate children of ``directory``."""
    files = folders = 0
    for entry in directory.iterdir():
        if entry.is_dir():
            folders += 1
        else:
            files += 1
    return files, folders


def _counted(directory: Path) -> tuple[int, int]:
    target = directory.expanduser()
    if not target.is_dir():
        error(f"Not a directory: {target}")
        raise typer.Exit(1)
    try:
        return count_entries(target)
    except PermissionError:
        error(f"Permission denied: {target}")
        raise typer.Exit(1)


def count(directory: Path = DIRECTORY_ARGUMENT):
    """Count files and folders in a directory (not recursive)."""
    files, folders = _counted(directory)
    typer.echo(f"Files  : {files}")
    typer.echo(f"Folders: {folders}")


def count_files(directory: Path = DIRECTORY_ARGUMENT):
    """Print the number of files in a directory (not recursive)."""
    typer.echo(_counted(directory)[0])


def count_folders(directory: Path = DIRECTORY_ARGUMENT):
    """Print the number of folders in a directory (not recursive)."""
    typer.echo(_counted(directory)[1])

"""``rename-files-with-date``: normalise dated file names to ``YYYY-MM-DD HH.MM.SS.ext``.

Handles the usual camera and screenshot patterns, e.g. ``IMG_20240115_143022.jpg``
or ``Screenshot 2024-01-15 at 14.30.22.png``.
"""

import re
from pathlib import Path
from typing import Optional

import typer

from ..ui import console

DATE_PATTERN = re.compile(
    r"^[^0-9]*(\d{4})[_-]?(\d{2})[_-]?(\d{2})(?:[_-]|\s?at\s|\s)?(\d{2})[._-]?(\d{2})[._-]?(\d{2}).*(\.[^.]+)$",
    re.IGNORECASE,
)


def dated_name(filename: str) -> Optional[str]:
    """The normalised name for ``filename``, or None when it carries no valid timestamp."""
    match = DATE_PATTERN.match(filename)
    if not match:
        return None
    year, month, day, hour, minute, second, extension = match.groups()
    if not (1 <= int(month) <= 12 and 1 <= int(day) <= 31):
        return None
    if int(hour) > 23 or int(minute) > 59 or int(second) > 59:
        return None
    return f"{year}-{month}-{day} {hour}.{minute}.{second}{extension.lower()}"


def rename_file(path: Path) -> tuple[str, Optional[str]]:
    """Rename ``path`` in place; return ``(status, new_name)``.

    Status is one of ``renamed``, ``unchanged``, ``exists``, ``no-date`` or ``error``.
    """
    new_name = dated_name(path.name)
    if new_name is None:
        return "no-date", None
    if new_name == path.name:
        return "unchanged", new_name
    destination = path.with_name(new_name)
    if destination.exists():
        return "exists", new_name
    try:
        path.rename(destination)
    except OSError as exc:
        console.print(f"  [red]Error[/red] renaming \"{path.name}\": {exc.strerror or exc}", highlight=False)
        return "error", new_name
    return "renamed", new_name


def rename_files_with_date(
    paths: Optional[list[Path]] = typer.Argument(None, help="Files or directories (default: current directory)"),
):
    """Rename files whose names contain a timestamp to YYYY-MM-DD HH.MM.SS.ext."""
    counts = {"renamed": 0, "unchanged": 0, "exists": 0, "no-date": 0, "error": 0}
    scanned = 0
    console.print("Scanning for files with dates in filenames...\n")

    for given in paths or [Path(".")]:
        target = given.expanduser()
        if target.is_dir():
            console.print(f"Processing directory: {given}", highlight=False)
            files = sorted(p for p in target.iterdir() if p.is_file())
        elif target.is_file():
            files = [target]
        else:
            console.print(f"[yellow]Warning:[/yellow] Path does not exist: {given}", highlight=False)
            continue

        for path in files:
            scanned += 1
            status, new_name = rename_file(path)
            counts[status] += 1
            if status == "renamed":
                console.print(f'  Renamed: "{path.name}" -> "{new_name}"', highlight=False)
            elif status == "exists":
                console.print(f'  Skipped: "{path.name}" (target "{new_name}" already exists)', highlight=False)

    console.print("\n---")
    console.print(f"Total files scanned: {scanned}")
    console.print(f"Renamed:             {counts['renamed']}")
    if counts["exists"]:
        console.print(f"Skipped (exists):    {counts['exists']}")
    if counts["unchanged"]:
        console.print(f"Already formatted:   {counts['unchanged']}")
    if counts["error"]:
        console.print(f"Errors:              {counts['error']}")
    if scanned and counts["no-date"] == scanned:
        console.print("No files with date patterns found.")
    if counts["error"]:
        raise typer.Exit(1)

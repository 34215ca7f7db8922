"""``refresh-files``: overwrite files in a project with same-path files from a reference copy.

Only files present in both trees are touched; nothing is added or removed.
"""

import os
import shutil
from pathlib import Path
from typing import Iterator, Optional

import typer

from ..ui import console, error

SKIP_DIRECTORIES = {"node_modules", "bower_components", ".git"}


def walk_files(root: Path) -> Iterator[Path]:
    """Every file below ``root`` outside the skipped directories, as a relative path."""
    for current, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRECTORIES)
        for filename in sorted(filenames):
            yield (Path(current) / filename).relative_to(root)


def refresh(source: Path, target: Path) -> tuple[list[Path], list[Path]]:
    """Copy ``source/rel`` over ``target/rel`` for every shared file; return ``(refreshed, failed)``."""
    refreshed, failed = [], []
    for relative in walk_files(target):
        reference = source / relative
        if not reference.is_file():
            continue
        try:
            shutil.copyfile(reference, target / relative)
        except OSError:
            failed.append(relative)
            continue
        refreshed.append(relative)
    return refreshed, failed


def refresh_files(
    source: Path = typer.Argument(..., help="Reference project to copy from"),
    target: Optional[Path] = typer.Argument(None, help="Project to update (default: current directory)"),
):
    """Refresh files in TARGET from SOURCE for paths that exist in both."""
    source = source.expanduser().resolve()
    target = (target or Path.cwd()).expanduser().resolve()
    for label, folder in (("Source", source), ("Target", target)):
        if not folder.is_dir():
            error(f"{label} folder does not exist: {folder}")
            raise typer.Exit(1)

    console.print("Refreshing files...")
    console.print(f"FROM: {source}", highlight=False)
    console.print(f"TO  : {target}", highlight=False)
    console.print("-----")
    refreshed, failed = refresh(source, target)
    for relative in refreshed:
        typer.echo(relative.as_posix())
    console.print("-----")
    console.print(f"Files refreshed: {len(refreshed)}")

    if failed:
        console.print(f"\nFailed to refresh {len(failed)} file{'' if len(failed) == 1 else 's'}:")
        for relative in failed:
            console.print(f"  - {relative.as_posix()}", highlight=False)
        console.print("\nTip: Check file permissions on the above files.")
        raise typer.Exit(1)

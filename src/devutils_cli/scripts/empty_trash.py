"""``empty-trash``: permanently delete everything in the user's trash."""

import logging
import shutil
from pathlib import Path

import typer

from .. import platforms, shell
from ..ui import console, error
from .common import LINUX_FAMILY, WINDOWS_FAMILY, dispatch, for_platforms

logger = logging.getLogger(__name__)

# relative to the home directory
MACOS_TRASH = (Path(".Trash"),)
FREEDESKTOP_TRASH = tuple(Path(".local", "share", "Trash", name) for name in ("files", "info", "expunged"))

CLEAR_RECYCLE_BIN = 'powershell -NoProfile -Command "Clear-RecycleBin -Force -ErrorAction SilentlyContinue"'


def empty_directory(directory: Path, verbose: bool = False) -> tuple[int, list[str]]:
    """Delete the children of ``directory``; return ``(removed, errors)``."""
    removed = 0
    errors = []
    if not directory.is_dir():
        return removed, errors
    for entry in directory.iterdir():
        try:
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
        except OSError as exc:
            errors.append(f"{entry}: {exc.strerror or exc}")
            continue
        removed += 1
        if verbose:
            console.print(f"Removed: {entry}", highlight=False)
    return removed, errors


def _empty(trash_dirs: tuple[Path, ...], verbose: bool) -> None:
    home = platforms.get_home_dir()
    removed = 0
    errors: list[str] = []
    for relative in trash_dirs:
        count, failed = empty_directory(home / relative, verbose)
        removed += count
        errors.extend(failed)

    if removed:
        console.print(f"Trash emptied. Removed {removed} item(s).")
    elif not errors:
        console.print("Trash is already empty.")
    if errors:
        console.print("\nSome items could not be removed:")
        for line in errors:
            console.print(f"  {line}", highlight=False)
        raise typer.Exit(1)


def empty_macos(verbose: bool) -> None:
    _empty(MACOS_TRASH, verbose)


def empty_linux(verbose: bool) -> None:
    _empty(FREEDESKTOP_TRASH, verbose)


def empty_windows(verbose: bool) -> None:
    result = shell.run_command(CLEAR_RECYCLE_BIN)
    if not result.ok:
        error("Could not empty the Recycle Bin.")
        logger.debug("Clear-RecycleBin: %s", result.stderr.strip())
        raise typer.Exit(1)
    console.print("Recycle Bin emptied.")


HANDLERS = {
    "macos": empty_macos,
    **for_platforms(empty_linux, LINUX_FAMILY),
    **for_platforms(empty_windows, WINDOWS_FAMILY),
}


def empty_trash(verbose: bool = typer.Option(False, "--verbose", "-v", help="List each removed item")):
    """Empty the trash (macOS Trash, freedesktop Trash or the Windows Recycle Bin)."""
    dispatch("empty-trash", HANDLERS, verbose)

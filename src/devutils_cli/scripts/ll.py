"""``ll``: long directory listing.

Unix-like platforms hand over to ``ls -l``. Windows has no ``ls``, so the
listing is built from ``lstat`` in the same column layout.
"""

import os
import stat
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable, Optional

import typer

from .. import shell
from ..ui import error
from .common import LINUX_FAMILY, WINDOWS_FAMILY, dispatch, exit_with, for_platforms

RECENT = timedelta(days=180)


def format_timestamp(moment: datetime, now: Optional[datetime] = None) -> str:
    """Time of day for entries from the last six months, the year otherwise."""
    now = now or datetime.now()
    if now - moment < RECENT:
        return f"{moment:%b} {moment.day:>2} {moment:%H:%M}"
    return f"{moment:%b} {moment.day:>2} {moment.year:>5}"


def listing(entries: Iterable[Path], now: Optional[datetime] = None) -> list[str]:
    """Render ``mode links size date name`` rows, sorted case-insensitively."""
    rows = []
    for entry in sorted(entries, key=lambda p: p.name.lower()):
        try:
            info = entry.lstat()
        except OSError:
            continue
        name = entry.name
        if stat.S_ISLNK(info.st_mode):
            name = f"{name} -> {os.readlink(entry)}"
        modified = datetime.fromtimestamp(info.st_mtime)
        rows.append((stat.filemode(info.st_mode), str(info.st_nlink), str(info.st_size), format_timestamp(modified, now), name))

    links_width = max((len(row[1]) for row in rows), default=1)
    size_width = max((len(row[2]) for row in rows), default=1)
    return [
        f"{mode} {links:>{links_width}} {size:>{size_width}} {date} {name}"
        for mode, links, size, date, name in rows
    ]


def ll_macos(target: str) -> None:
    exit_with(shell.run_interactive(["ls", "-l", target]))


def ll_linux(target: str) -> None:
    exit_with(shell.run_interactive(["ls", "-l", "--color=auto", target]))


def ll_windows(target: str) -> None:
    path = Path(target).expanduser()
    if not path.exists() and not path.is_symlink():
        error(f"cannot access '{target}': No such file or directory")
        raise typer.Exit(1)
    entries = list(path.iterdir()) if path.is_dir() else [path]
    for line in listing(entries):
        typer.echo(line)


HANDLERS = {
    "macos": ll_macos,
    **for_platforms(ll_linux, LINUX_FAMILY),
    **for_platforms(ll_windows, WINDOWS_FAMILY),
}


def ll(target: str = typer.Argument(".", help="File or directory to list")):
    """List a directory in long format (ls -l)."""
    dispatch("ll", HANDLERS, target)

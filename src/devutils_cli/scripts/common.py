"""Helpers shared by the alias-replacement scripts."""

from typing import Callable

import typer

from .. import platforms, shell
from ..errors import UnsupportedPlatformError
from ..ui import console, error

DEBIAN_FAMILY = ("ubuntu", "debian", "raspbian", "wsl")
RPM_FAMILY = ("amazon_linux", "fedora", "rhel")
LINUX_FAMILY = ("ubuntu", "debian", "raspbian", "amazon_linux", "fedora", "rhel", "linux", "wsl")
WINDOWS_FAMILY = ("windows", "gitbash")


def for_platforms(handler: Callable, kinds) -> dict[str, Callable]:
    return {kind: handler for kind in kinds}


def dispatch(script: str, handlers: dict[str, Callable], *args, **kwargs):
    """Run the handler for the detected platform; exit 1 when there is none."""
    current = platforms.detect()
    try:
        handler = platforms.require_handler(handlers, current.type)
    except UnsupportedPlatformError:
        error(f"{script} is not supported on {current.label}.")
        raise typer.Exit(1)
    return handler(*args, **kwargs)


def require_command(command: str, hint: str = "") -> None:
    if shell.command_exists(command):
        return
    error(f"{command} is required but was not found.")
    if hint:
        console.print(hint)
    raise typer.Exit(1)


def exit_with(code: int) -> None:
    if code != 0:
        raise typer.Exit(code)

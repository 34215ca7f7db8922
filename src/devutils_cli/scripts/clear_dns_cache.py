"""``clear-dns-cache``: flush the operating system's DNS resolver cache."""

import typer

from .. import shell
from ..ui import console, error
from .common import LINUX_FAMILY, WINDOWS_FAMILY, dispatch, for_platforms

# first available wins
LINUX_FLUSHERS = (
    ("resolvectl", "sudo resolvectl flush-caches"),
    ("systemd-resolve", "sudo systemd-resolve --flush-caches"),
    ("nscd", "sudo service nscd restart"),
    ("dnsmasq", "sudo service dnsmasq restart"),
)


def flush_macos() -> bool:
    flushed = shell.run_command("sudo dscacheutil -flushcache").ok
    return shell.run_command("sudo killall -HUP mDNSResponder").ok and flushed


def flush_linux() -> bool:
    for command, flush in LINUX_FLUSHERS:
        if shell.command_exists(command):
            return shell.run_command(flush).ok
    error("No supported DNS cache service found (systemd-resolved, nscd, dnsmasq).")
    raise typer.Exit(1)


def flush_windows() -> bool:
    return shell.run_command("ipconfig /flushdns").ok


HANDLERS = {
    "macos": flush_macos,
    **for_platforms(flush_linux, LINUX_FAMILY),
    **for_platforms(flush_windows, WINDOWS_FAMILY),
}


def clear_dns_cache():
    """Flush the DNS resolver cache."""
    if not dispatch("clear-dns-cache", HANDLERS):
        error("Failed to flush the DNS cache.")
        raise typer.Exit(1)
    console.print("[green]DNS cache flushed.[/green]")

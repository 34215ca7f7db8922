"""``ports``: list open network ports (replaces ``lsof -i -P -n``)."""

import re
from typing import Optional

import typer

from .. import shell
from ..ui import console, error
from .common import LINUX_FAMILY, WINDOWS_FAMILY, dispatch, for_platforms, require_command


def filter_port(output: str, port: int) -> Optional[str]:
    """Keep the header plus lines mentioning ``port``; None when nothing matches."""
    lines = output.splitlines()
    if not lines:
        return None
    pattern = re.compile(rf"[:*]{port}\b")
    matches = [line for line in lines[1:] if pattern.search(line)]
    if not matches:
        return None
    return "\n".join([lines[0], *matches])


def filter_lines(output: str, marker: str) -> Optional[str]:
    lines = output.splitlines()
    if not lines:
        return None
    matches = [line for line in lines[1:] if marker in line]
    if not matches:
        return None
    return "\n".join([lines[0], *matches])


def _report(output: str, port: Optional[int], listen_marker: Optional[str] = None) -> None:
    if listen_marker:
        output = filter_lines(output, listen_marker) or ""
        if not output:
            console.print("No listening ports found.")
            return
    if port is not None:
        filtered = filter_port(output, port)
        if filtered is None:
            console.print(f"No connections found on port {port}.")
            return
        output = filtered
    if output.strip():
        typer.echo(output.rstrip("\n"))
    else:
        console.print("No open network connections found.")
        console.print("Tip: run with sudo to see process names.")


def ports_macos(listening: bool, tcp: bool, udp: bool, port: Optional[int]) -> None:
    require_command("lsof", "lsof ships with macOS; check your PATH.")
    selector = "-iTCP" if tcp and not udp else "-iUDP" if udp and not tcp else "-i"
    if port is not None:
        selector += f":{port}"
    result = shell.run_command(f"lsof {selector} -P -n")
    # lsof exits 1 when nothing matched
    _report(result.stdout, None, "(LISTEN)" if listening else None)


def ports_linux(listening: bool, tcp: bool, udp: bool, port: Optional[int]) -> None:
    if shell.command_exists("ss"):
        protocols = "-t" if tcp and not udp else "-u" if udp and not tcp else "-t -u"
        result = shell.run_command(f"ss -n -p {protocols} {'-l' if listening else '-a'}")
    elif shell.command_exists("netstat"):
        protocols = "-t" if tcp and not udp else "-u" if udp and not tcp else "-t -u"
        result = shell.run_command(f"netstat -n -p {protocols} {'-l' if listening else '-a'}")
    else:
        error("Neither ss nor netstat is available.")
        console.print("Install with: sudo apt install iproute2   (ss)")
        console.print("         or: sudo apt install net-tools  (netstat)")
        raise typer.Exit(1)
    if not result.ok and not result.stdout:
        error(result.stderr.strip() or "Failed to list ports.")
        raise typer.Exit(1)
    _report(result.stdout, port)


def ports_windows(listening: bool, tcp: bool, udp: bool, port: Optional[int]) -> None:
    command = "netstat -a -n -o"
    if tcp and not udp:
        command += " -p TCP"
    elif udp and not tcp:
        command += " -p UDP"
    result = shell.run_command(command)
    if not result.ok:
        error(result.stderr.strip() or "Failed to run netstat.")
        raise typer.Exit(1)
    _report(result.stdout, port, "LISTENING" if listening else None)


HANDLERS = {
    "macos": ports_macos,
    **for_platforms(ports_linux, LINUX_FAMILY),
    **for_platforms(ports_windows, WINDOWS_FAMILY),
}


def ports(
    port: Optional[int] = typer.Argument(None, help="Only show connections on this port"),
    listening: bool = typer.Option(False, "--listening", "-l", help="Show only listening ports"),
    tcp: bool = typer.Option(False, "--tcp", "-t", help="Show only TCP"),
    udp: bool = typer.Option(False, "--udp", "-u", help="Show only UDP"),
):
    """List open network ports and the processes using them."""
    if port is not None and not 1 <= port <= 65535:
        error(f"Invalid port: {port}. Must be between 1 and 65535.")
        raise typer.Exit(1)
    dispatch("ports", HANDLERS, listening, tcp, udp, port)

"""``ips``: every IPv4 address, grouped by network interface."""

import re

import typer

from .. import shell
from ..ui import console, error
from .common import LINUX_FAMILY, WINDOWS_FAMILY, dispatch, for_platforms

_IFCONFIG_IFACE = re.compile(r"^(\S+?):? ")
_IFCONFIG_INET = re.compile(r"\binet (?:addr:)?(\d+\.\d+\.\d+\.\d+)")
_IP_ADDR = re.compile(r"^\d+:\s+(\S+)\s+inet\s+(\d+\.\d+\.\d+\.\d+)")
_IPCONFIG_V4 = re.compile(r"IPv4 Address[ .]*:\s*(\d+\.\d+\.\d+\.\d+)")


def parse_ifconfig(output: str) -> list[tuple[str, str]]:
    found = []
    interface = None
    for line in output.splitlines():
        if line and not line[0].isspace():
            match = _IFCONFIG_IFACE.match(line)
            interface = match.group(1) if match else None
            continue
        match = _IFCONFIG_INET.search(line)
        if match and interface:
            found.append((interface, match.group(1)))
    return found


def parse_ip_addr(output: str) -> list[tuple[str, str]]:
    found = []
    for line in output.splitlines():
        match = _IP_ADDR.match(line)
        if match:
            found.append((match.group(1), match.group(2)))
    return found


def parse_ipconfig(output: str) -> list[tuple[str, str]]:
    found = []
    adapter = None
    for line in output.splitlines():
        if line and not line[0].isspace() and line.rstrip().endswith(":"):
            adapter = line.rstrip()[:-1].strip()
            continue
        match = _IPCONFIG_V4.search(line)
        if match and adapter:
            found.append((adapter, match.group(1)))
    return found


def addresses_unix() -> list[tuple[str, str]]:
    if shell.command_exists("ip"):
        return parse_ip_addr(shell.run_quiet("ip -4 -o addr show"))
    if shell.command_exists("ifconfig"):
        return parse_ifconfig(shell.run_quiet("ifconfig"))
    error("Neither ip nor ifconfig is available.")
    raise typer.Exit(1)


def addresses_macos() -> list[tuple[str, str]]:
    return parse_ifconfig(shell.run_quiet("ifconfig"))


def addresses_windows() -> list[tuple[str, str]]:
    return parse_ipconfig(shell.run_quiet("ipconfig"))


HANDLERS = {
    "macos": addresses_macos,
    **for_platforms(addresses_unix, LINUX_FAMILY),
    **for_platforms(addresses_windows, WINDOWS_FAMILY),
}


def ips(
    include_loopback: bool = typer.Option(False, "--all", "-a", help="Include loopback addresses"),
):
    """List IPv4 addresses by network interface."""
    found = dispatch("ips", HANDLERS)
    if not include_loopback:
        found = [(iface, ip) for iface, ip in found if not ip.startswith("127.")]
    if not found:
        console.print("No IPv4 addresses found.")
        return
    width = max(len(iface) for iface, _ in found)
    for iface, ip in found:
        typer.echo(f"{iface:<{width}}  {ip}")

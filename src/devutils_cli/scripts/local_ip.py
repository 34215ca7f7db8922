"""``local-ip``: the machine's primary IPv4 address."""

import logging
import socket
from typing import Optional

import typer

from ..ui import error

logger = logging.getLogger(__name__)

# Nothing is sent: connecting a UDP socket only selects the outbound interface.
ROUTE_ADDRESS = ("10.255.255.255", 1)


def primary_ipv4() -> Optional[str]:
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.connect(ROUTE_ADDRESS)
        address = sock.getsockname()[0]
    except OSError as exc:
        logger.debug("udp lookup failed: %s", exc)
        address = None
    finally:
        sock.close()

    if address and not address.startswith("0."):
        return address
    try:
        address = socket.gethostbyname(socket.gethostname())
    except OSError as exc:
        logger.debug("hostname lookup failed: %s", exc)
        return None
    return address


def local_ip():
    """Print the primary local IPv4 address."""
    address = primary_ipv4()
    if not address:
        error("Could not determine the local IP address.")
        raise typer.Exit(1)
    typer.echo(address)

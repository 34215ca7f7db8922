"""``dev version`` and ``dev update``: compare against the latest release on PyPI."""

import logging
import os
import ssl
import sys
from importlib.metadata import PackageNotFoundError, version as package_version
from typing import Optional

import httpx
import truststore
import typer
from packaging.version import InvalidVersion, Version

from .. import shell
from ..ui import console, rule

logger = logging.getLogger(__name__)

PACKAGE_NAME = "devutils-cli"
PYPI_URL_ENV = "DEVUTILS_PYPI_URL"
DEFAULT_PYPI_URL = f"https://pypi.org/pypi/{PACKAGE_NAME}/json"

ssl_context = truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)


def current_version() -> str:
    try:
        return package_version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "0.0.0.dev0"


def is_newer_version(current: Optional[str], latest: Optional[str]) -> bool:
    """True when ``latest`` is a later release than ``current``."""
    if not current or not latest:
        return False
    try:
        return Version(latest) > Version(current)
    except InvalidVersion:
        logger.debug("cannot compare versions %r and %r", current, latest)
        return False


def get_latest_version(client: Optional[httpx.Client] = None) -> Optional[str]:
    url = os.environ.get(PYPI_URL_ENV, DEFAULT_PYPI_URL)
    owns_client = client is None
    if client is None:
        client = httpx.Client(verify=ssl_context, timeout=10)
    try:
        response = client.get(url, follow_redirects=True)
        response.raise_for_status()
        return response.json()["info"]["version"]
    except (httpx.HTTPError, ValueError, KeyError) as exc:
        logger.debug("could not query %s: %s", url, exc)
        return None
    finally:
        if owns_client:
            client.close()


def _header(current: str) -> None:
    console.print(f"\n[bold]{PACKAGE_NAME}[/bold]")
    rule()
    console.print(f"Current version: {current}")
    console.print("\nChecking for updates...")


def version():
    """Display the current version and check for updates."""
    current = current_version()
    _header(current)
    latest = get_latest_version()
    if not latest:
        console.print("[yellow]Unable to check for updates (PyPI unreachable)[/yellow]\n")
        return

    if is_newer_version(current, latest):
        console.print(f"\n[cyan]Update available: {current} -> {latest}[/cyan]")
        console.print("\nTo update, run:\n  dev update\n")
    else:
        console.print(f"Latest version:  {latest}")
        console.print("\n[green]You are running the latest version.[/green]\n")


def update():
    """Update devutils-cli to the latest version."""
    current = current_version()
    _header(current)
    latest = get_latest_version()
    if not latest:
        console.print("[yellow]Unable to check for updates (PyPI unreachable)[/yellow]\n")
        return

    console.print(f"Latest version:  {latest}")
    if not is_newer_version(current, latest):
        console.print("\n[green]You are already running the latest version.[/green]\n")
        return

    console.print(f"\nUpdate available: {current} -> {latest}")
    console.print(f"\nInstalling {PACKAGE_NAME}=={latest}...")
    rule()
    code = shell.run_interactive([sys.executable, "-m", "pip", "install", "--upgrade", f"{PACKAGE_NAME}=={latest}"])
    rule()
    if code != 0:
        console.print("\n[red]Update failed.[/red] Try running manually:")
        console.print(f"  {sys.executable} -m pip install --upgrade {PACKAGE_NAME}=={latest}\n")
        raise typer.Exit(1)
    console.print(f"\n[green]Successfully updated to version {latest}[/green]\n")

"""``brewi``, ``brewr``, ``brews``, ``brewu``: Homebrew aliases on every platform.

Install, uninstall and search go through the native package manager where
Homebrew is not the norm. ``brewu`` is Homebrew maintenance and only runs
where ``brew`` exists.
"""

import logging

import typer

from .. import platforms, shell
from ..pkg import choco, dnf, winget
from ..ui import console, error
from .common import DEBIAN_FAMILY, RPM_FAMILY, WINDOWS_FAMILY, dispatch, exit_with, for_platforms, require_command

logger = logging.getLogger(__name__)

HOMEBREW_HINT = "Install Homebrew first: dev install homebrew"

COMMANDS = {
    "install": {
        "brew": ["brew", "install"],
        "apt": ["sudo", "DEBIAN_FRONTEND=noninteractive", "apt-get", "install", "-y"],
        "dnf": ["sudo", "dnf", "install", "-y"],
        "yum": ["sudo", "yum", "install", "-y"],
        "choco": ["choco", "install", "-y"],
        "winget": ["winget", "install", "--accept-package-agreements", "--accept-source-agreements"],
    },
    "uninstall": {
        "brew": ["brew", "uninstall"],
        "apt": ["sudo", "DEBIAN_FRONTEND=noninteractive", "apt-get", "remove", "-y"],
        "dnf": ["sudo", "dnf", "remove", "-y"],
        "yum": ["sudo", "yum", "remove", "-y"],
        "choco": ["choco", "uninstall", "-y"],
        "winget": ["winget", "uninstall"],
    },
    "search": {
        "brew": ["brew", "search"],
        "apt": ["apt-cache", "search"],
        "dnf": ["dnf", "search"],
        "yum": ["yum", "search"],
        "choco": ["choco", "search"],
        "winget": ["winget", "search"],
    },
}

MANUAL_UPGRADE = {
    "apt": "sudo apt update && sudo apt upgrade -y && sudo apt autoremove -y",
    "dnf": "sudo dnf upgrade -y && sudo dnf autoremove -y",
    "windows": "choco upgrade all -y  or  winget upgrade --all",
}

BREW_MAINTENANCE = (
    ("Updating Homebrew...", ["brew", "update", "--quiet"]),
    ("Upgrading packages...", ["brew", "upgrade"]),
    ("Cleaning up...", ["brew", "cleanup"]),
)


def manager_macos() -> str:
    require_command("brew", HOMEBREW_HINT)
    return "brew"


def manager_debian() -> str:
    require_command("apt-get")
    return "apt"


def manager_rpm() -> str:
    manager = dnf.get_manager()
    if manager is None:
        error("Neither dnf nor yum package manager found.")
        raise typer.Exit(1)
    return manager


def manager_windows() -> str:
    if choco.is_installed():
        return "choco"
    if winget.is_installed():
        return "winget"
    error("Neither Chocolatey nor winget is available.")
    console.print("Install Chocolatey from https://chocolatey.org/install or use winget (Windows 10 21H2+).")
    raise typer.Exit(1)


MANAGERS = {
    "macos": manager_macos,
    **for_platforms(manager_debian, DEBIAN_FAMILY),
    **for_platforms(manager_rpm, RPM_FAMILY),
    **for_platforms(manager_windows, WINDOWS_FAMILY),
}


def build_command(action: str, manager: str, packages: list[str], cask: bool = False) -> list[str]:
    argv = list(COMMANDS[action][manager])
    if manager == "choco":
        argv[0] = choco.get_executable_path() or "choco"
    if cask:
        argv.append("--cask")
    return argv + packages


def _run(script: str, action: str, packages: list[str], cask: bool = False, heading: str = "") -> None:
    manager = dispatch(script, MANAGERS)
    if cask and manager != "brew":
        error("--cask is only supported with Homebrew.")
        raise typer.Exit(1)
    if heading:
        console.print(f"{heading} via {manager}: {', '.join(packages)}", highlight=False)
    argv = build_command(action, manager, packages, cask)
    logger.debug("running %s", argv)
    exit_with(shell.run_interactive(argv))


def brewi(
    packages: list[str] = typer.Argument(..., help="Packages to install"),
    cask: bool = typer.Option(False, "--cask", help="Install a Homebrew cask (GUI app)"),
):
    """Install packages with the system package manager (brew install)."""
    _run("brewi", "install", packages, cask, heading="Installing")


def brewr(
    packages: list[str] = typer.Argument(..., help="Packages to uninstall"),
    cask: bool = typer.Option(False, "--cask", help="Uninstall a Homebrew cask"),
):
    """Uninstall packages with the system package manager (brew uninstall)."""
    _run("brewr", "uninstall", packages, cask, heading="Uninstalling")


def brews(terms: list[str] = typer.Argument(..., help="Search terms")):
    """Search for packages with the system package manager (brew search)."""
    _run("brews", "search", terms)


def _manual_upgrade_hint() -> str:
    kind = platforms.detect().type
    if kind in DEBIAN_FAMILY:
        return MANUAL_UPGRADE["apt"]
    if kind in RPM_FAMILY:
        return MANUAL_UPGRADE["dnf"]
    if kind in WINDOWS_FAMILY:
        return MANUAL_UPGRADE["windows"]
    return ""


def brewu():
    """Update Homebrew, upgrade every formula and clean up (brew update/upgrade/cleanup)."""
    if not shell.command_exists("brew"):
        error("Homebrew is not installed.")
        console.print(HOMEBREW_HINT)
        hint = _manual_upgrade_hint()
        if hint:
            console.print(f"To update system packages instead, run:\n  {hint}", highlight=False)
        raise typer.Exit(1)

    for index, (label, argv) in enumerate(BREW_MAINTENANCE):
        if index:
            console.print()
        console.print(f"==> {label}")
        code = shell.run_interactive(argv)
        if code != 0:
            error(f"{' '.join(argv[:2])} failed with exit code {code}")
            raise typer.Exit(code)
    console.print("\nHomebrew maintenance complete!")

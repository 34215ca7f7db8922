"""Pick a package manager for the current platform and install through it."""

from typing import Optional

from .. import platforms, shell
from . import PackageResult, apt, brew, choco, dnf, winget

_DEBIAN_FAMILY = ("ubuntu", "debian", "raspbian", "wsl")
_RPM_FAMILY = ("amazon_linux", "fedora", "rhel")


def get_available() -> list[str]:
    """Package managers whose CLI is present on this machine."""
    kind = platforms.detect().type
    available = []
    if kind == "macos":
        if shell.command_exists("brew"):
            available.append("brew")
    elif kind in _DEBIAN_FAMILY:
        if shell.command_exists("apt-get"):
            available.append("apt")
        if shell.command_exists("snap"):
            available.append("snap")
    elif kind in _RPM_FAMILY:
        for manager in ("dnf", "yum"):
            if shell.command_exists(manager):
                available.append(manager)
    elif kind in ("windows", "gitbash"):
        if shell.command_exists("winget"):
            available.append("winget")
        if choco.is_installed():
            available.append("choco")

    if shell.command_exists("pip") or shell.command_exists("pip3"):
        available.append("pip")
    return available


def get_preferred() -> Optional[str]:
    current = platforms.detect()
    if current.type == "macos":
        return "brew"
    if current.type in _DEBIAN_FAMILY:
        return "apt"
    if current.type in _RPM_FAMILY:
        return current.package_manager
    if current.type == "windows":
        return "winget" if shell.command_exists("winget") else "choco"
    if current.type == "gitbash":
        return "choco"
    return None


def install(name: str, manager: Optional[str] = None, cask: bool = False) -> PackageResult:
    manager = manager or get_preferred()
    if manager is None:
        return PackageResult(False, "No package manager available")

    if manager == "brew":
        return brew.install_cask(name) if cask else brew.install(name)
    if manager == "apt":
        return apt.install(name)
    if manager in ("dnf", "yum"):
        return dnf.install(name, manager=manager)
    if manager == "choco":
        return choco.install(name)
    if manager == "winget":
        return winget.install(name)
    if manager == "snap":
        return PackageResult.from_command(shell.run_command(f"sudo snap install {name}"))
    if manager == "pip":
        return PackageResult.from_command(shell.run_command(f"python -m pip install --user {name}"))
    return PackageResult(False, f"Unknown package manager: {manager}")

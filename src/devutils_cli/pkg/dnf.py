"""DNF / YUM / rpm (Amazon Linux, Fedora, RHEL)."""

from typing import Iterable, Optional, Union

from .. import shell
from . import PackageResult


def get_manager() -> Optional[str]:
    """``dnf`` when available, else ``yum``, else None."""
    if shell.command_exists("dnf"):
        return "dnf"
    if shell.command_exists("yum"):
        return "yum"
    return None


def is_installed() -> bool:
    return get_manager() is not None


def install(packages: Union[str, Iterable[str]], manager: Optional[str] = None) -> PackageResult:
    manager = manager or get_manager()
    if manager is None:
        return PackageResult.unavailable("dnf/yum")
    names = packages if isinstance(packages, str) else " ".join(packages)
    return PackageResult.from_command(shell.run_command(f"sudo {manager} install -y {names}"))


def update(manager: Optional[str] = None) -> PackageResult:
    manager = manager or get_manager()
    if manager is None:
        return PackageResult.unavailable("dnf/yum")
    return PackageResult.from_command(shell.run_command(f"sudo {manager} update -y"))


def is_package_installed(package: str) -> bool:
    if not shell.command_exists("rpm"):
        return False
    return shell.run_command(f"rpm -q {package} 2>/dev/null").ok

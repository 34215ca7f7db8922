"""APT / dpkg (Debian, Ubuntu, Raspberry Pi OS, WSL)."""

from typing import Iterable, Optional, Union

from .. import shell
from . import PackageResult

APT_PREFIX = "sudo DEBIAN_FRONTEND=noninteractive apt-get"


def is_installed() -> bool:
    return shell.command_exists("apt-get")


def _join(packages: Union[str, Iterable[str]]) -> str:
    return packages if isinstance(packages, str) else " ".join(packages)


def update() -> PackageResult:
    if not is_installed():
        return PackageResult.unavailable("apt-get")
    return PackageResult.from_command(shell.run_command(f"{APT_PREFIX} update -y"))


def install(packages: Union[str, Iterable[str]]) -> PackageResult:
    if not is_installed():
        return PackageResult.unavailable("apt-get")
    return PackageResult.from_command(shell.run_command(f"{APT_PREFIX} install -y {_join(packages)}"))


def remove(packages: Union[str, Iterable[str]], purge: bool = False) -> PackageResult:
    if not is_installed():
        return PackageResult.unavailable("apt-get")
    verb = "purge" if purge else "remove"
    return PackageResult.from_command(shell.run_command(f"{APT_PREFIX} {verb} -y {_join(packages)}"))


def fix_broken() -> PackageResult:
    return PackageResult.from_command(shell.run_command(f"{APT_PREFIX} install -f -y"))


def is_package_installed(package: str) -> bool:
    if not shell.command_exists("dpkg"):
        return False
    result = shell.run_command(f'dpkg -l {package} 2>/dev/null | grep -q "^ii"')
    return result.ok


def get_package_version(package: str) -> Optional[str]:
    if not shell.command_exists("dpkg"):
        return None
    result = shell.run_command(f"dpkg -l {package} 2>/dev/null | grep \"^ii\" | awk '{{print $3}}'")
    version = result.stdout.strip()
    return version if result.ok and version else None

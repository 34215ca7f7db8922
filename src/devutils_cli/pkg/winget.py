"""winget (Windows)."""

from typing import Optional

from .. import shell
from . import PackageResult

AGREEMENTS = "--accept-package-agreements --accept-source-agreements"


def is_installed() -> bool:
    return shell.command_exists("winget")


def install(package_id: str, silent: bool = True, version: Optional[str] = None) -> PackageResult:
    if not is_installed():
        return PackageResult.unavailable("winget")
    command = f'winget install --exact --id "{package_id}" {AGREEMENTS}'
    if silent:
        command += " --silent"
    if version:
        command += f' --version "{version}"'
    return PackageResult.from_command(shell.run_command(command))


def uninstall(package_id: str) -> PackageResult:
    if not is_installed():
        return PackageResult.unavailable("winget")
    return PackageResult.from_command(shell.run_command(f'winget uninstall --exact --id "{package_id}" --silent'))


def is_package_installed(package_id: str) -> bool:
    if not is_installed():
        return False
    result = shell.run_command(f'winget list --exact --id "{package_id}"')
    return result.ok and package_id.lower() in result.stdout.lower()

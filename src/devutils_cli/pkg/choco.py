"""Chocolatey (Windows, Git Bash)."""

from pathlib import Path
from typing import Optional

from .. import shell
from . import PackageResult

CHOCO_BIN_DIR = r"C:\ProgramData\chocolatey\bin"
CHOCO_KNOWN_PATH = CHOCO_BIN_DIR + r"\choco.exe"
GITBASH_CHOCO_PATH = "/c/ProgramData/chocolatey/bin/choco.exe"


def get_executable_path() -> Optional[str]:
    """``choco`` when on PATH, else the well-known install location if it exists.

    Right after Chocolatey is installed PATH is not refreshed in the current
    process, so the fixed location is checked as well.
    """
    if shell.command_exists("choco"):
        return "choco"
    for candidate in (CHOCO_KNOWN_PATH, GITBASH_CHOCO_PATH):
        if Path(candidate).exists():
            return candidate
    return None


def is_installed() -> bool:
    return get_executable_path() is not None


def _run(args: str) -> PackageResult:
    choco = get_executable_path()
    if choco is None:
        return PackageResult.unavailable("Chocolatey")
    return PackageResult.from_command(shell.run_command(f'"{choco}" {args}'))


def install(package: str, version: Optional[str] = None) -> PackageResult:
    args = f"install {package} -y"
    if version:
        args += f" --version {version}"
    return _run(args)


def uninstall(package: str) -> PackageResult:
    return _run(f"uninstall {package} -y")


def upgrade(package: str = "all") -> PackageResult:
    return _run(f"upgrade {package} -y")


def _local_listing(package: str) -> str:
    choco = get_executable_path()
    if choco is None:
        return ""
    result = shell.run_command(f'"{choco}" list --local-only --exact {package}')
    return result.stdout if result.ok else ""


def is_package_installed(package: str) -> bool:
    return package.lower() in _local_listing(package).lower()


def get_package_version(package: str) -> Optional[str]:
    for line in _local_listing(package).splitlines():
        parts = line.split()
        if len(parts) >= 2 and parts[0].lower() == package.lower():
            return parts[1]
    return None

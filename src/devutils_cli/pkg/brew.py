"""Homebrew (macOS)."""

import re
from typing import Optional

from .. import shell
from . import PackageResult

_MISSING = "Homebrew is not installed"


def is_installed() -> bool:
    return shell.command_exists("brew")


def get_version() -> Optional[str]:
    if not is_installed():
        return None
    result = shell.run_command("brew --version")
    if not result.ok:
        return None
    match = re.search(r"Homebrew\s+(\d+\.\d+\.?\d*)", result.stdout)
    return match.group(1) if match else None


def _run(command: str) -> PackageResult:
    if not is_installed():
        return PackageResult(False, _MISSING)
    return PackageResult.from_command(shell.run_command(command))


def install(formula: str) -> PackageResult:
    return _run(f"brew install --quiet {formula}")


def install_cask(cask: str) -> PackageResult:
    return _run(f"brew install --quiet --cask {cask}")


def uninstall(formula: str) -> PackageResult:
    return _run(f"brew uninstall {formula}")


def tap(repository: str) -> PackageResult:
    return _run(f"brew tap {repository}")


def update() -> PackageResult:
    return _run("brew update")


def upgrade(formula: Optional[str] = None) -> PackageResult:
    return _run(f"brew upgrade {formula}" if formula else "brew upgrade")


def is_formula_installed(formula: str) -> bool:
    if not is_installed():
        return False
    return shell.run_command(f"brew list --formula {formula}").ok


def is_cask_installed(cask: str) -> bool:
    if not is_installed():
        return False
    return shell.run_command(f"brew list --cask {cask}").ok

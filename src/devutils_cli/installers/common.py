"""Helpers shared by the installer modules."""

import logging
import os
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .. import platforms, shell
from ..errors import InstallError
from ..pkg import PackageResult, apt, brew, choco, dnf, package_manager, winget
from ..shell import CommandResult
from ..ui import console

logger = logging.getLogger(__name__)

DEBIAN_FAMILY = ("ubuntu", "debian", "raspbian", "wsl")
RPM_FAMILY = ("amazon_linux", "fedora", "rhel")
WINDOWS_FAMILY = ("windows", "gitbash")

HOMEBREW_HINT = "Install Homebrew first: dev install homebrew"
CHOCOLATEY_HINT = "Install Chocolatey first: https://chocolatey.org/install"


def say(message: str = "") -> None:
    console.print(message, highlight=False)


def warn(message: str) -> None:
    console.print(f"[yellow]Warning:[/yellow] {message}", highlight=False)
    logger.warning(message)


def install_failed(summary: str, output: str = "", troubleshooting: Iterable[str] = ()) -> InstallError:
    """Build an InstallError whose message carries output and numbered troubleshooting steps."""
    lines = [summary]
    if output and output.strip():
        lines.append(f"Output: {output.strip()}")
    steps = list(troubleshooting)
    if steps:
        lines.extend(["", "Troubleshooting:"])
        lines.extend(f"  {i}. {step}" for i, step in enumerate(steps, 1))
    return InstallError("\n".join(lines))


def check(result, summary: str, troubleshooting: Iterable[str] = ()) -> None:
    """Raise InstallError when a CommandResult or PackageResult reports failure."""
    if isinstance(result, CommandResult):
        if result.ok:
            return
        raise install_failed(summary, result.stderr or result.stdout, troubleshooting)
    if not result.success:
        raise install_failed(summary, result.output, troubleshooting)


def soft(result, message: str) -> bool:
    """Warn and continue when a non-critical step failed."""
    ok = result.ok if isinstance(result, CommandResult) else result.success
    if not ok:
        warn(message)
    return ok


def current_user() -> Optional[str]:
    return os.environ.get("USER") or os.environ.get("USERNAME")


def is_eligible_for(supported: Iterable[str], requires_desktop: bool = False) -> bool:
    if platforms.detect().type not in set(supported):
        return False
    if requires_desktop and not platforms.is_desktop_available():
        return False
    return True


def run_handler(display_name: str, handlers: dict[str, Callable[[], None]]) -> None:
    """Dispatch to the handler for the detected platform, or print a notice and return."""
    current = platforms.detect()
    handler = platforms.resolve_handler(handlers, current.type)
    if handler is None:
        say(f"{display_name} is not available for {current.type}.")
        return
    logger.debug("installing %s with %s", display_name, handler.__name__)
    handler()


def check_installed(handlers: dict[str, Callable[[], bool]]) -> bool:
    checker = platforms.resolve_handler(handlers)
    return bool(checker and checker())


def require_brew() -> None:
    if not brew.is_installed():
        raise install_failed("Homebrew is not installed.", troubleshooting=[HOMEBREW_HINT])


def require_choco() -> None:
    if not choco.is_installed():
        raise install_failed("Chocolatey is not installed.", troubleshooting=[CHOCOLATEY_HINT])


def apt_update() -> None:
    soft(apt.update(), "Failed to update package lists. Continuing with installation...")


@dataclass(frozen=True)
class SimplePackage:
    """A tool installable with one package name per package manager.

    A manager left as None means the tool is not offered on those platforms.
    """

    name: str
    display_name: str
    command: str
    brew: Optional[str] = None
    apt: Optional[str] = None
    dnf: Optional[str] = None
    choco: Optional[str] = None
    winget: Optional[str] = None
    brew_cask: bool = False

    def is_installed(self) -> bool:
        return shell.command_exists(self.command)

    def _skip_if_present(self) -> bool:
        if self.is_installed():
            say(f"{self.display_name} is already installed, skipping installation.")
            return True
        return False

    def _finish(self, result: PackageResult, via: str, troubleshooting: Iterable[str] = ()) -> None:
        check(result, f"Failed to install {self.display_name} via {via}.", troubleshooting)
        if self.is_installed():
            say(f"{self.display_name} installed successfully.")
        else:
            say(f"{self.display_name} was installed. Restart your terminal if '{self.command}' is not found.")

    def install_macos(self) -> None:
        if self._skip_if_present():
            return
        require_brew()
        say(f"Installing {self.display_name} via Homebrew...")
        result = package_manager.install(self.brew, "brew", cask=self.brew_cask)
        self._finish(result, "Homebrew", [f"Run 'brew install {self.brew}' manually to see the full error"])

    def install_debian(self) -> None:
        if self._skip_if_present():
            return
        apt_update()
        say(f"Installing {self.display_name} via APT...")
        self._finish(package_manager.install(self.apt, "apt"), "APT", [f"Run 'sudo apt-get install -y {self.apt}' manually"])

    def install_rpm(self) -> None:
        if self._skip_if_present():
            return
        manager = dnf.get_manager()
        if manager is None:
            raise install_failed("Neither dnf nor yum package manager found.")
        say(f"Installing {self.display_name} via {manager}...")
        self._finish(package_manager.install(self.dnf, manager), manager)

    def install_windows(self) -> None:
        if self._skip_if_present():
            return
        if self.choco and choco.is_installed():
            say(f"Installing {self.display_name} via Chocolatey...")
            self._finish(package_manager.install(self.choco, "choco"), "Chocolatey")
            return
        if self.winget and winget.is_installed():
            say(f"Installing {self.display_name} via winget...")
            self._finish(package_manager.install(self.winget, "winget"), "winget")
            return
        raise install_failed("Neither Chocolatey nor winget is installed.", troubleshooting=[CHOCOLATEY_HINT])

    @property
    def handlers(self) -> dict[str, Callable[[], None]]:
        table: dict[str, Callable[[], None]] = {}
        if self.brew:
            table["macos"] = self.install_macos
        if self.apt:
            table.update({kind: self.install_debian for kind in DEBIAN_FAMILY})
        if self.dnf:
            table.update({kind: self.install_rpm for kind in RPM_FAMILY})
        if self.choco or self.winget:
            table.update({kind: self.install_windows for kind in WINDOWS_FAMILY})
        return table

    def is_eligible(self) -> bool:
        return is_eligible_for(self.handlers)

    def install(self) -> None:
        run_handler(self.display_name, self.handlers)

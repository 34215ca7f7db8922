"""Homebrew on macOS, and Homebrew on Linux (Linuxbrew)."""

from pathlib import Path

from .. import platforms, shell
from ..pkg import apt, brew, dnf
from .common import apt_update, check, install_failed, is_eligible_for, run_handler, say

NAME = "homebrew"
DISPLAY_NAME = "Homebrew"
REQUIRES_DESKTOP = False

INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
INSTALL_TIMEOUT = 600

PREFIXES = {
    "macos_arm": Path("/opt/homebrew"),
    "macos_intel": Path("/usr/local"),
    "linux": Path("/home/linuxbrew/.linuxbrew"),
}

DEBIAN_BUILD_DEPENDENCIES = ("build-essential", "procps", "curl", "file", "git")
RPM_BUILD_DEPENDENCIES = ("procps-ng", "curl", "file", "git", "gcc", "make")


def brew_binary() -> Path:
    """Where the brew executable lands for this platform and CPU."""
    if platforms.detect().type == "macos":
        prefix = PREFIXES["macos_arm"] if platforms.get_arch() == "arm64" else PREFIXES["macos_intel"]
    else:
        prefix = PREFIXES["linux"]
    return prefix / "bin" / "brew"


def is_installed() -> bool:
    return brew.is_installed() or brew_binary().exists()


def _run_installer() -> None:
    say("Downloading and running the Homebrew installer...")
    say("This may take several minutes...")
    result = shell.run_command(f'NONINTERACTIVE=1 /bin/bash -c "$(curl -fsSL {INSTALL_URL})"', timeout=INSTALL_TIMEOUT)
    check(result, "Failed to install Homebrew.", [
        "If the Xcode Command Line Tools installation hung, run: xcode-select --install",
        "Make sure you own the Homebrew prefix directory",
    ])
    binary = brew_binary()
    say("Homebrew installed successfully.")
    say()
    say("Add Homebrew to your shell with:")
    say(f"  eval \"$({binary} shellenv)\"")


def _skip_if_present() -> bool:
    if is_installed():
        say("Homebrew is already installed, skipping installation.")
        return True
    return False


def install_macos() -> None:
    if _skip_if_present():
        return
    if not shell.command_exists("curl"):
        raise install_failed("curl is required to download the Homebrew installer.")
    _run_installer()


def install_debian() -> None:
    if _skip_if_present():
        return
    if platforms.get_arch() not in ("x64", "arm64"):
        say(f"Homebrew on Linux does not support {platforms.get_arch()}.")
        return
    say("Installing required build dependencies...")
    apt_update()
    check(apt.install(DEBIAN_BUILD_DEPENDENCIES), "Failed to install build dependencies.")
    _run_installer()


def install_rpm() -> None:
    if _skip_if_present():
        return
    if platforms.get_arch() != "x64":
        say(f"Homebrew on Linux does not support {platforms.get_arch()} on this distribution.")
        return
    say("Installing required build dependencies...")
    check(dnf.install(RPM_BUILD_DEPENDENCIES), "Failed to install build dependencies.")
    _run_installer()


HANDLERS = {
    "macos": install_macos,
    "ubuntu": install_debian,
    "debian": install_debian,
    "raspbian": install_debian,
    "wsl": install_debian,
    "amazon_linux": install_rpm,
    "fedora": install_rpm,
    "rhel": install_rpm,
}


def is_eligible() -> bool:
    return is_eligible_for(HANDLERS)


def install() -> None:
    run_handler(DISPLAY_NAME, HANDLERS)

"""VLC media player."""

from .. import platforms, shell
from ..pkg import apt, brew, choco, dnf, macos_apps
from .common import (
    apt_update,
    check,
    check_installed,
    install_failed,
    is_eligible_for,
    require_brew,
    require_choco,
    run_handler,
    say,
    soft,
)

NAME = "vlc"
DISPLAY_NAME = "VLC"
REQUIRES_DESKTOP = True

HOMEBREW_CASK = "vlc"
APT_PACKAGE = "vlc"
CHOCO_PACKAGE = "vlc"
MACOS_APP = "VLC"


def install_macos() -> None:
    if macos_apps.is_app_installed(MACOS_APP):
        say("VLC is already installed, skipping installation.")
        return
    require_brew()
    say("Installing VLC via Homebrew...")
    check(brew.install_cask(HOMEBREW_CASK), "Failed to install VLC via Homebrew.",
          ["Run 'brew update' and retry", "brew install --cask vlc"])
    say("VLC installed successfully.")


def install_debian() -> None:
    if apt.is_package_installed(APT_PACKAGE):
        say("VLC is already installed, skipping installation.")
        return
    apt_update()
    say("Installing VLC via APT...")
    check(apt.install(APT_PACKAGE), "Failed to install VLC.", ["sudo apt-get install -y vlc"])
    say("VLC installed successfully.")


def _rhel_version(manager: str) -> str:
    version = shell.run_quiet("rpm -E %rhel")
    if not version or version == "%rhel":
        # AL2023 tracks RHEL 9 repositories, AL2 tracks RHEL 8
        version = "9" if manager == "dnf" else "8"
    return version


def install_rpm() -> None:
    """VLC lives in RPM Fusion, which on EL systems needs EPEL first."""
    if dnf.is_package_installed("vlc"):
        say("VLC is already installed, skipping installation.")
        return
    manager = dnf.get_manager()
    if manager is None:
        raise install_failed("Neither dnf nor yum package manager found.")

    if platforms.detect().type == "fedora":
        fusion = "https://download1.rpmfusion.org/free/fedora/rpmfusion-free-release-$(rpm -E %fedora).noarch.rpm"
    else:
        version = _rhel_version(manager)
        say(f"Using RHEL {version} compatible repositories...")
        epel = f"https://dl.fedoraproject.org/pub/epel/epel-release-latest-{version}.noarch.rpm"
        soft(shell.run_command(f"sudo {manager} install -y {epel}"), "EPEL may already be installed, continuing...")
        fusion = f"https://download1.rpmfusion.org/free/el/rpmfusion-free-release-{version}.noarch.rpm"

    say("Installing RPM Fusion Free repository...")
    check(shell.run_command(f"sudo {manager} install -y {fusion}"), "Failed to install RPM Fusion repository.",
          ["Check your internet connection", "Verify the repository URL is reachable"])
    say("Installing VLC...")
    check(dnf.install("vlc", manager=manager), "Failed to install VLC.")
    say("VLC installed successfully.")


def install_windows() -> None:
    if choco.is_package_installed(CHOCO_PACKAGE):
        say("VLC is already installed, skipping installation.")
        return
    require_choco()
    say("Installing VLC via Chocolatey...")
    check(choco.install(CHOCO_PACKAGE), "Failed to install VLC via Chocolatey.", ["choco install vlc -y"])
    say("VLC installed successfully.")


HANDLERS = {
    "macos": install_macos,
    "ubuntu": install_debian,
    "debian": install_debian,
    "raspbian": install_debian,
    "wsl": install_debian,
    "amazon_linux": install_rpm,
    "fedora": install_rpm,
    "rhel": install_rpm,
    "windows": install_windows,
    "gitbash": install_windows,
}

_INSTALLED_CHECKS = {
    "macos": lambda: macos_apps.is_app_installed(MACOS_APP),
    "ubuntu": lambda: apt.is_package_installed(APT_PACKAGE),
    "debian": lambda: apt.is_package_installed(APT_PACKAGE),
    "raspbian": lambda: apt.is_package_installed(APT_PACKAGE),
    "wsl": lambda: apt.is_package_installed(APT_PACKAGE),
    "amazon_linux": lambda: dnf.is_package_installed("vlc"),
    "fedora": lambda: dnf.is_package_installed("vlc"),
    "rhel": lambda: dnf.is_package_installed("vlc"),
    "windows": lambda: choco.is_package_installed(CHOCO_PACKAGE),
    "gitbash": lambda: choco.is_package_installed(CHOCO_PACKAGE),
}


def is_installed() -> bool:
    return check_installed(_INSTALLED_CHECKS)


def is_eligible() -> bool:
    return is_eligible_for(HANDLERS, REQUIRES_DESKTOP)


def install() -> None:
    run_handler(DISPLAY_NAME, HANDLERS)

"""DBeaver Community database client."""

from .. import platforms, shell
from ..pkg import apt, brew, choco, dnf, macos_apps
from .common import (
    check,
    check_installed,
    install_failed,
    is_eligible_for,
    require_brew,
    require_choco,
    run_handler,
    say,
)

NAME = "dbeaver"
DISPLAY_NAME = "DBeaver"
REQUIRES_DESKTOP = True

HOMEBREW_CASK = "dbeaver-community"
CHOCO_PACKAGE = "dbeaver"
APT_PACKAGE = "dbeaver-ce"
MACOS_APP = "DBeaver"

GPG_KEY_URL = "https://dbeaver.io/debs/dbeaver.gpg.key"
KEYRING_PATH = "/usr/share/keyrings/dbeaver.gpg.key"
APT_REPO = f"deb [signed-by={KEYRING_PATH}] https://dbeaver.io/debs/dbeaver-ce /"
SOURCES_LIST = "/etc/apt/sources.list.d/dbeaver.list"
RPM_URL = "https://dbeaver.io/files/dbeaver-ce-latest-stable.x86_64.rpm"
RPM_PATH = platforms.get_temp_dir() / "dbeaver-ce.rpm"


def setup_apt_repository() -> None:
    say("Setting up DBeaver APT repository...")
    check(
        shell.run_command(
            "sudo DEBIAN_FRONTEND=noninteractive apt-get update -y && "
            "sudo DEBIAN_FRONTEND=noninteractive apt-get install -y wget gpg"
        ),
        "Failed to install prerequisites (wget, gpg).",
    )
    check(shell.run_command(f"sudo wget -O {KEYRING_PATH} {GPG_KEY_URL}"), "Failed to download the DBeaver GPG key.")
    check(shell.run_command(f'echo "{APT_REPO}" | sudo tee {SOURCES_LIST} > /dev/null'),
          "Failed to add the DBeaver repository.")
    check(apt.update(), "Failed to update package lists.")


def install_macos() -> None:
    if macos_apps.is_app_installed(MACOS_APP):
        say("DBeaver is already installed, skipping installation.")
        return
    require_brew()
    say("Installing DBeaver Community via Homebrew...")
    check(brew.install_cask(HOMEBREW_CASK), "Failed to install DBeaver via Homebrew.")
    say("DBeaver installed successfully.")


def install_debian() -> None:
    if apt.is_package_installed(APT_PACKAGE):
        say("DBeaver is already installed, skipping installation.")
        return
    if platforms.get_arch() not in ("x64", "arm64"):
        say(f"DBeaver does not publish packages for {platforms.get_arch()}.")
        return
    setup_apt_repository()
    say("Installing DBeaver Community...")
    check(apt.install(APT_PACKAGE), "Failed to install DBeaver.",
          [f"Check the repository entry: cat {SOURCES_LIST}", "sudo apt-get install -y dbeaver-ce"])
    say("DBeaver installed successfully.")
    say("Launch with: dbeaver")


def install_rpm() -> None:
    if dnf.is_package_installed(APT_PACKAGE):
        say("DBeaver is already installed, skipping installation.")
        return
    if platforms.get_arch() != "x64":
        say("DBeaver RPM packages are only published for x86_64.")
        return
    manager = dnf.get_manager()
    if manager is None:
        raise install_failed("Neither dnf nor yum package manager found.")
    if not shell.command_exists("wget"):
        check(dnf.install("wget", manager=manager), "Failed to install wget.")

    say("Downloading DBeaver .rpm package...")
    check(shell.run_command(f"wget -q {RPM_URL} -O {RPM_PATH}"), "Failed to download DBeaver.")
    say("Installing DBeaver...")
    result = shell.run_command(f"sudo {manager} install -y {RPM_PATH}")
    shell.run_command(f"rm -f {RPM_PATH}")
    check(result, "Failed to install DBeaver.")
    say("DBeaver installed successfully.")


def install_windows() -> None:
    if choco.is_package_installed(CHOCO_PACKAGE):
        say("DBeaver is already installed, skipping installation.")
        return
    require_choco()
    say("Installing DBeaver via Chocolatey...")
    check(choco.install(CHOCO_PACKAGE), "Failed to install DBeaver via Chocolatey.",
          ["choco install dbeaver -y --force"])
    say("DBeaver installed successfully.")


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
    "amazon_linux": lambda: dnf.is_package_installed(APT_PACKAGE),
    "fedora": lambda: dnf.is_package_installed(APT_PACKAGE),
    "rhel": lambda: dnf.is_package_installed(APT_PACKAGE),
    "windows": lambda: choco.is_package_installed(CHOCO_PACKAGE),
    "gitbash": lambda: choco.is_package_installed(CHOCO_PACKAGE),
}


def is_installed() -> bool:
    return check_installed(_INSTALLED_CHECKS)


def is_eligible() -> bool:
    return is_eligible_for(HANDLERS, REQUIRES_DESKTOP)


def install() -> None:
    run_handler(DISPLAY_NAME, HANDLERS)

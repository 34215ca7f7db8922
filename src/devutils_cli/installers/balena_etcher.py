"""Balena Etcher, the USB/SD-card image flasher.

Linux packages are only published for x64; other architectures get guidance
and no download is attempted.
"""

from .. import platforms, shell
from ..pkg import apt, brew, choco, dnf, macos_apps, winget
from .common import (
    CHOCOLATEY_HINT,
    check,
    check_installed,
    install_failed,
    is_eligible_for,
    require_brew,
    run_handler,
    say,
    soft,
)

NAME = "balena-etcher"
DISPLAY_NAME = "Balena Etcher"
REQUIRES_DESKTOP = True

ETCHER_VERSION = "2.1.4"
_RELEASES = f"https://github.com/balena-io/etcher/releases/download/v{ETCHER_VERSION}"
DOWNLOAD_URLS = {
    "deb": f"{_RELEASES}/balena-etcher_{ETCHER_VERSION}_amd64.deb",
    "rpm": f"{_RELEASES}/balena-etcher-{ETCHER_VERSION}-1.x86_64.rpm",
}
DEB_PATH = platforms.get_temp_dir() / "balena-etcher.deb"
RPM_PATH = platforms.get_temp_dir() / "balena-etcher.rpm"

HOMEBREW_CASK = "balenaetcher"
MACOS_APP = "balenaEtcher"
WINGET_ID = "Balena.Etcher"
CHOCO_PACKAGE = "etcher"
WINDOWS_EXE = r"C:\Program Files\balenaEtcher\balenaEtcher.exe"

ARM_BUILDS_URL = "https://github.com/Itai-Nelken/BalenaEtcher-arm"


def is_installed_macos() -> bool:
    return macos_apps.is_app_installed(MACOS_APP)


def is_installed_debian() -> bool:
    return apt.is_package_installed("balena-etcher")


def is_installed_rpm() -> bool:
    return dnf.is_package_installed("balena-etcher")


def is_installed_raspbian() -> bool:
    return shell.command_exists("balena-etcher-electron") or shell.command_exists("balena-etcher")


def is_installed_windows() -> bool:
    result = shell.run_command(f"powershell -Command \"Test-Path '{WINDOWS_EXE}'\"")
    return result.stdout.strip().lower() == "true"


def _x64_only(family: str) -> bool:
    """Print guidance and return False when the CPU is not x64."""
    arch = platforms.get_arch()
    if arch == "x64":
        return True
    say(f"Balena Etcher does not provide official {arch} packages for {family}.")
    say()
    say("Official Balena Etcher releases only support x64 (AMD64).")
    say(f"Community ARM builds are available at: {ARM_BUILDS_URL}")
    return False


def _ensure_wget(installer) -> None:
    if shell.command_exists("wget"):
        return
    say("Installing wget (required for download)...")
    check(installer("wget"), "Failed to install wget.")


def _install_deb() -> None:
    _ensure_wget(apt.install)
    say("Downloading Balena Etcher .deb package...")
    check(shell.run_command(f'wget -q -O {DEB_PATH} "{DOWNLOAD_URLS["deb"]}"'), "Failed to download Balena Etcher.")

    say("Installing Balena Etcher...")
    result = shell.run_command(f"sudo DEBIAN_FRONTEND=noninteractive apt-get install -y {DEB_PATH}")
    shell.run_command(f"rm -f {DEB_PATH}")
    if not result.ok:
        say("Attempting to fix broken dependencies...")
        apt.fix_broken()
        raise install_failed("Failed to install Balena Etcher.", result.stderr)

    if not is_installed_debian():
        raise install_failed("Installation completed but the balena-etcher package was not found.")
    say("Balena Etcher installed successfully.")
    say("Launch with: balena-etcher")


def install_macos() -> None:
    if is_installed_macos():
        say("Balena Etcher is already installed.")
        return
    require_brew()
    say("Installing Balena Etcher via Homebrew Cask...")
    check(brew.install_cask(HOMEBREW_CASK), "Failed to install Balena Etcher via Homebrew.")
    say("Balena Etcher installed successfully.")
    say(f"Location: /Applications/{MACOS_APP}.app")


def install_ubuntu() -> None:
    if not _x64_only("Ubuntu/Debian"):
        return
    if is_installed_debian():
        say("Balena Etcher is already installed.")
        return
    _install_deb()


def install_ubuntu_wsl() -> None:
    if not _x64_only("WSL"):
        return
    if is_installed_debian():
        say("Balena Etcher is already installed.")
        return
    say("Note: Balena Etcher in WSL has limited USB device access.")
    _install_deb()


def install_raspbian() -> None:
    if is_installed_raspbian():
        say("Balena Etcher is already installed.")
        return
    if platforms.get_arch() != "arm64":
        say("Balena Etcher requires 64-bit Raspberry Pi OS (aarch64).")
        say("Consider Raspberry Pi Imager instead: sudo apt-get install -y rpi-imager")
        return
    if not shell.command_exists("pi-apps"):
        say("Installing Pi-Apps (required for Balena Etcher on Raspberry Pi)...")
        check(
            shell.run_command("wget -qO- https://raw.githubusercontent.com/Botspot/pi-apps/master/install | bash"),
            "Failed to install Pi-Apps.",
            ["sudo apt-get update && sudo apt-get install -y yad curl wget"],
        )
    say("Installing Balena Etcher via Pi-Apps...")
    check(shell.run_command("~/pi-apps/manage install Etcher"), "Failed to install Balena Etcher via Pi-Apps.")
    say("Balena Etcher installed successfully.")
    say("Launch with: balena-etcher-electron")


def install_amazon_linux() -> None:
    if not _x64_only("RHEL/Fedora/Amazon Linux"):
        return
    if is_installed_rpm():
        say("Balena Etcher is already installed.")
        return
    manager = dnf.get_manager() or "yum"
    _ensure_wget(lambda pkg: dnf.install(pkg, manager=manager))

    say("Downloading Balena Etcher .rpm package...")
    check(shell.run_command(f'wget -q -O {RPM_PATH} "{DOWNLOAD_URLS["rpm"]}"'), "Failed to download Balena Etcher.")

    say("Installing Balena Etcher...")
    result = shell.run_command(f"sudo {manager} install -y {RPM_PATH}")
    shell.run_command(f"rm -f {RPM_PATH}")
    check(result, "Failed to install Balena Etcher.",
          [f"Install missing dependencies: sudo {manager} install -y libXScrnSaver gtk3 nss alsa-lib"])
    say("Balena Etcher installed successfully.")
    say("Launch with: balena-etcher")


def install_windows() -> None:
    if is_installed_windows():
        say("Balena Etcher is already installed.")
        return
    if winget.is_installed():
        say("Installing Balena Etcher via winget...")
        if soft(winget.install(WINGET_ID), "winget installation was not successful, trying Chocolatey..."):
            say("Balena Etcher installed successfully.")
            return
    if choco.is_installed():
        say("Installing Balena Etcher via Chocolatey...")
        check(choco.install(CHOCO_PACKAGE), "Failed to install Balena Etcher via Chocolatey.")
        say("Balena Etcher installed successfully.")
        return
    raise install_failed("Neither winget nor Chocolatey is installed.", troubleshooting=[CHOCOLATEY_HINT])


HANDLERS = {
    "macos": install_macos,
    "ubuntu": install_ubuntu,
    "debian": install_ubuntu,
    "wsl": install_ubuntu_wsl,
    "raspbian": install_raspbian,
    "amazon_linux": install_amazon_linux,
    "fedora": install_amazon_linux,
    "rhel": install_amazon_linux,
    "windows": install_windows,
    "gitbash": install_windows,
}

_INSTALLED_CHECKS = {
    "macos": is_installed_macos,
    "ubuntu": is_installed_debian,
    "debian": is_installed_debian,
    "wsl": is_installed_debian,
    "raspbian": is_installed_raspbian,
    "amazon_linux": is_installed_rpm,
    "fedora": is_installed_rpm,
    "rhel": is_installed_rpm,
    "windows": is_installed_windows,
    "gitbash": is_installed_windows,
}


def is_installed() -> bool:
    return check_installed(_INSTALLED_CHECKS)


def is_eligible() -> bool:
    return is_eligible_for(HANDLERS, REQUIRES_DESKTOP)


def install() -> None:
    run_handler(DISPLAY_NAME, HANDLERS)

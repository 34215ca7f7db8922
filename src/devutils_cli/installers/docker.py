"""Docker Desktop (macOS, Windows) and Docker Engine (Linux, WSL)."""

import re
from typing import Optional

from .. import platforms, shell
from ..pkg import brew, choco, dnf, systemd
from .common import (
    apt_update,
    check,
    current_user,
    install_failed,
    is_eligible_for,
    require_brew,
    require_choco,
    run_handler,
    say,
    soft,
)

NAME = "docker"
DISPLAY_NAME = "Docker"
REQUIRES_DESKTOP = False

HOMEBREW_CASK = "docker"
CHOCO_PACKAGE = "docker-desktop"

APT = "sudo DEBIAN_FRONTEND=noninteractive apt-get"
KEYRING = "/etc/apt/keyrings/docker.asc"
SOURCES_LIST = "/etc/apt/sources.list.d/docker.list"

DOCKER_APT_PACKAGES = (
    "docker-ce",
    "docker-ce-cli",
    "containerd.io",
    "docker-buildx-plugin",
    "docker-compose-plugin",
)

CONFLICTING_PACKAGES = (
    "docker.io",
    "docker-doc",
    "docker-compose",
    "podman-docker",
    "containerd",
    "runc",
)

_VERSION_RE = re.compile(r"Docker version ([\d.]+)")


def get_docker_version() -> Optional[str]:
    """Version reported by ``docker --version``, or None when docker is absent."""
    if not shell.command_exists("docker"):
        return None
    result = shell.run_command("docker --version")
    if not result.ok or not result.stdout:
        return None
    match = _VERSION_RE.search(result.stdout)
    return match.group(1) if match else result.stdout.strip()


def _already_installed() -> bool:
    version = get_docker_version()
    if version:
        say(f"Docker {version} is already installed, skipping installation.")
        return True
    return False


def remove_conflicting_packages() -> None:
    say("Removing any conflicting Docker packages...")
    for package in CONFLICTING_PACKAGES:
        shell.run_command(f"{APT} remove -y {package} 2>/dev/null || true")


def setup_apt_repository(repo_distro: str = "ubuntu") -> None:
    """Add Docker's signed APT repository for ``repo_distro`` and refresh the package cache."""
    say("Setting up Docker APT repository...")
    check(
        shell.run_command(f"{APT} update -y && {APT} install -y ca-certificates curl"),
        "Failed to install prerequisites (ca-certificates, curl).",
    )
    check(shell.run_command("sudo install -m 0755 -d /etc/apt/keyrings"), "Failed to create keyring directory.")
    check(
        shell.run_command(
            f"sudo curl -fsSL https://download.docker.com/linux/{repo_distro}/gpg -o {KEYRING} && sudo chmod a+r {KEYRING}"
        ),
        "Failed to add Docker GPG key.",
    )

    codename = '${UBUNTU_CODENAME:-$VERSION_CODENAME}' if repo_distro == "ubuntu" else "$VERSION_CODENAME"
    say("Adding Docker repository...")
    check(
        shell.run_command(
            f'echo "deb [arch=$(dpkg --print-architecture) signed-by={KEYRING}] '
            f"https://download.docker.com/linux/{repo_distro} "
            f'$(. /etc/os-release && echo "{codename}") stable" | '
            f"sudo tee {SOURCES_LIST} > /dev/null"
        ),
        "Failed to add Docker repository.",
    )
    say("Updating package cache...")
    check(shell.run_command(f"{APT} update -y"), "Failed to update package cache.")


def install_engine_apt() -> None:
    say("Installing Docker Engine packages...")
    check(
        shell.run_command(f"{APT} install -y {' '.join(DOCKER_APT_PACKAGES)}"),
        "Failed to install Docker Engine packages.",
        [
            "Run 'sudo apt-get update' and retry",
            f"Check the repository entry: cat {SOURCES_LIST}",
            f"Verify the GPG key exists: ls -la {KEYRING}",
        ],
    )


def add_user_to_group() -> None:
    user = current_user()
    if not user:
        return
    say("Adding current user to docker group...")
    soft(
        shell.run_command(f"sudo usermod -aG docker {user}"),
        "Could not add user to docker group. You may need to run: sudo usermod -aG docker $USER",
    )


def configure_linux() -> None:
    say("Configuring Docker to start on boot...")
    soft(systemd.enable_service("docker.service"), "Could not enable docker.service. You may need to start it manually.")
    soft(
        systemd.enable_service("containerd.service"),
        "Could not enable containerd.service. You may need to start it manually.",
    )
    add_user_to_group()


def _verify(post_install: str = "") -> None:
    version = get_docker_version()
    if not version:
        raise install_failed(
            "Installation appeared to complete but Docker was not found.",
            troubleshooting=["Restart your terminal session", "Run: docker --version"],
        )
    say(f"Docker Engine {version} installed successfully.")
    say()
    say("To run Docker without sudo, log out and back in (or run: newgrp docker).")
    if post_install:
        say(post_install)


def install_macos() -> None:
    if _already_installed():
        return
    if brew.is_cask_installed(HOMEBREW_CASK):
        say("Docker Desktop is installed but not running. Launch it with: open -a Docker")
        return
    require_brew()
    say("Installing Docker Desktop via Homebrew...")
    check(brew.install_cask(HOMEBREW_CASK), "Failed to install Docker Desktop via Homebrew.",
          ["Run 'brew update' and retry", "Run 'brew doctor' to diagnose Homebrew"])
    say("Docker Desktop installed successfully.")
    say("Launch Docker Desktop from /Applications to finish setup.")


def install_ubuntu() -> None:
    if _already_installed():
        return
    repo = "ubuntu" if platforms.detect().type == "ubuntu" else "debian"
    remove_conflicting_packages()
    setup_apt_repository(repo)
    install_engine_apt()
    configure_linux()
    _verify()


def install_raspbian() -> None:
    if _already_installed():
        return
    # 32-bit Raspberry Pi OS has its own repository; 64-bit uses Debian's
    repo = "raspbian" if platforms.get_arch() == "arm" else "debian"
    remove_conflicting_packages()
    setup_apt_repository(repo)
    install_engine_apt()
    configure_linux()
    _verify()


def install_ubuntu_wsl() -> None:
    if _already_installed():
        return
    remove_conflicting_packages()
    setup_apt_repository("ubuntu")
    install_engine_apt()
    add_user_to_group()
    # WSL distributions often run without systemd
    soft(shell.run_command("sudo service docker start"), "Could not start the Docker service.")
    _verify("In WSL, start Docker with: sudo service docker start")


def install_amazon_linux() -> None:
    if _already_installed():
        return
    manager = dnf.get_manager()
    if manager is None:
        raise install_failed("Neither dnf nor yum package manager found.")

    say(f"Installing Docker via {manager}...")
    soft(dnf.update(manager), "System update had issues, continuing with installation...")
    if manager == "yum" and shell.command_exists("amazon-linux-extras"):
        result = shell.run_command("sudo amazon-linux-extras install -y docker")
    else:
        result = shell.run_command(f"sudo {manager} install -y docker")
    check(result, "Failed to install Docker.", [
        "For Amazon Linux 2023: sudo dnf install docker",
        "For Amazon Linux 2: sudo amazon-linux-extras install docker",
    ])

    soft(shell.run_command("sudo systemctl start docker"), "Could not start Docker service automatically.")
    soft(shell.run_command("sudo systemctl enable docker"), "Could not enable Docker service.")
    add_user_to_group()
    if manager == "dnf":
        soft(dnf.install("docker-compose-plugin", manager="dnf"),
             "Could not install docker-compose-plugin. You can install it manually later.")
    _verify()


def install_windows() -> None:
    if _already_installed():
        return
    if choco.is_package_installed(CHOCO_PACKAGE):
        say("Docker Desktop is installed. Launch it from the Start Menu.")
        return
    require_choco()
    say("Installing Docker Desktop via Chocolatey...")
    check(choco.install(CHOCO_PACKAGE), "Failed to install Docker Desktop.",
          ["Run the terminal as Administrator and retry", f"choco install {CHOCO_PACKAGE} -y"])
    say("Docker Desktop installed successfully. A restart may be required.")


def install_gitbash() -> None:
    say("Installing Docker Desktop on the Windows host...")
    install_windows()
    say("Git Bash: use 'winpty docker run -it <image>' for interactive containers.")


HANDLERS = {
    "macos": install_macos,
    "ubuntu": install_ubuntu,
    "debian": install_ubuntu,
    "raspbian": install_raspbian,
    "wsl": install_ubuntu_wsl,
    "amazon_linux": install_amazon_linux,
    "fedora": install_amazon_linux,
    "rhel": install_amazon_linux,
    "windows": install_windows,
    "gitbash": install_gitbash,
}


def is_installed() -> bool:
    return get_docker_version() is not None


def is_eligible() -> bool:
    return is_eligible_for(HANDLERS)


def install() -> None:
    run_handler(DISPLAY_NAME, HANDLERS)

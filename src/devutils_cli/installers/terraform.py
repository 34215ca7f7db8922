"""HashiCorp Terraform."""

import re
from typing import Optional

from .. import platforms, shell
from ..pkg import apt, brew, choco
from .common import (
    apt_update,
    check,
    is_eligible_for,
    require_brew,
    require_choco,
    run_handler,
    say,
)

NAME = "terraform"
DISPLAY_NAME = "Terraform"
REQUIRES_DESKTOP = False

TERRAFORM_VERSION = "1.14.3"
HASHICORP_TAP = "hashicorp/tap"
BREW_FORMULA = "hashicorp/tap/terraform"
CHOCO_PACKAGE = "terraform"

KEYRING = "/usr/share/keyrings/hashicorp-archive-keyring.gpg"
RPM_REPOS = {
    "amazon_linux": "https://rpm.releases.hashicorp.com/AmazonLinux/hashicorp.repo",
    "fedora": "https://rpm.releases.hashicorp.com/fedora/hashicorp.repo",
    "rhel": "https://rpm.releases.hashicorp.com/RHEL/hashicorp.repo",
}
_BINARY_ARCH = {"arm64": "linux_arm64", "arm": "linux_arm", "x64": "linux_amd64"}


def get_version() -> Optional[str]:
    if not shell.command_exists("terraform"):
        return None
    match = re.search(r"Terraform v([\d.]+)", shell.run_quiet("terraform --version"))
    return match.group(1) if match else None


def _already_installed() -> bool:
    if not shell.command_exists("terraform"):
        return False
    version = get_version()
    say(f"Terraform is already installed (version {version or 'unknown'}), skipping...")
    return True


def _done() -> None:
    version = get_version()
    if version:
        say(f"Terraform {version} installed successfully.")
    else:
        say("Terraform installed. Restart your terminal if 'terraform' is not found.")


def install_macos() -> None:
    if _already_installed():
        return
    require_brew()
    say("Adding HashiCorp tap...")
    check(brew.tap(HASHICORP_TAP), "Failed to add the HashiCorp Homebrew tap.")
    say("Installing Terraform via Homebrew...")
    check(brew.install(BREW_FORMULA), "Failed to install Terraform via Homebrew.",
          ["Run 'brew update' and retry", f"brew install {BREW_FORMULA}"])
    _done()


def install_ubuntu() -> None:
    if _already_installed():
        return
    apt_update()
    check(apt.install(["gnupg", "software-properties-common", "wget"]), "Failed to install prerequisite packages.")

    say("Adding HashiCorp GPG key...")
    check(
        shell.run_command(f"wget -O- https://apt.releases.hashicorp.com/gpg | sudo gpg --batch --yes --dearmor -o {KEYRING}"),
        "Failed to add HashiCorp GPG key.",
    )
    say("Adding HashiCorp APT repository...")
    check(
        shell.run_command(
            f'echo "deb [arch=$(dpkg --print-architecture) signed-by={KEYRING}] '
            "https://apt.releases.hashicorp.com $(grep -oP '(?<=UBUNTU_CODENAME=).*' /etc/os-release || lsb_release -cs) main\" | "
            "sudo tee /etc/apt/sources.list.d/hashicorp.list > /dev/null"
        ),
        "Failed to add HashiCorp repository.",
    )
    apt_update()
    say("Installing Terraform...")
    check(apt.install("terraform"), "Failed to install Terraform.")
    _done()


def install_raspbian() -> None:
    """HashiCorp's APT repository has no ARM packages, so fetch the release zip."""
    if _already_installed():
        return
    arch = platforms.get_arch()
    binary_arch = _BINARY_ARCH.get(arch)
    if binary_arch is None:
        say(f"Unsupported architecture: {arch}")
        return

    if not shell.command_exists("unzip"):
        say("Installing unzip...")
        check(apt.install("unzip"), "Failed to install unzip.")

    url = f"https://releases.hashicorp.com/terraform/{TERRAFORM_VERSION}/terraform_{TERRAFORM_VERSION}_{binary_arch}.zip"
    staging = platforms.get_temp_dir()
    archive = staging / "terraform.zip"
    say(f"Downloading Terraform {TERRAFORM_VERSION}...")
    check(shell.run_command(f'wget -q "{url}" -O {archive}'), "Failed to download Terraform.")
    try:
        check(shell.run_command(f"unzip -o -q {archive} -d {staging}"), "Failed to extract Terraform.")
        check(
            shell.run_command(f"sudo mv {staging / 'terraform'} /usr/local/bin/ && sudo chmod +x /usr/local/bin/terraform"),
            "Failed to move Terraform into /usr/local/bin.",
        )
    finally:
        shell.run_command(f"rm -f {archive}")
    _done()


def install_rpm() -> None:
    if _already_installed():
        return
    kind = platforms.detect().type
    check(shell.run_command("sudo yum install -y yum-utils"), "Failed to install yum-utils.")
    say("Adding HashiCorp YUM repository...")
    check(shell.run_command(f"sudo yum-config-manager --add-repo {RPM_REPOS.get(kind, RPM_REPOS['rhel'])}"),
          "Failed to add HashiCorp repository.")
    say("Installing Terraform...")
    check(shell.run_command("sudo yum install -y terraform"), "Failed to install Terraform.")
    _done()


def install_windows() -> None:
    if _already_installed():
        return
    require_choco()
    say("Installing Terraform via Chocolatey...")
    check(choco.install(CHOCO_PACKAGE), "Failed to install Terraform via Chocolatey.",
          ["Run the terminal as Administrator and retry"])
    say("Terraform installed. Open a new terminal to use it.")


HANDLERS = {
    "macos": install_macos,
    "ubuntu": install_ubuntu,
    "debian": install_ubuntu,
    "wsl": install_ubuntu,
    "raspbian": install_raspbian,
    "amazon_linux": install_rpm,
    "fedora": install_rpm,
    "rhel": install_rpm,
    "windows": install_windows,
    "gitbash": install_windows,
}


def is_installed() -> bool:
    kind = platforms.detect().type
    if kind == "macos" and brew.is_formula_installed(BREW_FORMULA):
        return True
    if kind in ("windows", "gitbash") and choco.is_package_installed(CHOCO_PACKAGE):
        return True
    return shell.command_exists("terraform")


def is_eligible() -> bool:
    return is_eligible_for(HANDLERS)


def install() -> None:
    run_handler(DISPLAY_NAME, HANDLERS)

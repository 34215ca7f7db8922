from __future__ import annotations

from pathlib import Path

import pytest

from devutils_cli.pkg import PackageResult, apt, brew, choco, dnf, macos_apps, package_manager, systemd, winget
from devutils_cli.shell import CommandResult


def test_package_result_from_command() -> None:
    assert PackageResult.from_command(CommandResult(0, "done")) == PackageResult(True, "done")
    assert PackageResult.from_command(CommandResult(2, "", "boom")) == PackageResult(False, "boom")


def test_brew_reports_missing_homebrew(fake_shell) -> None:
    result = brew.install("jq")
    assert not result.success
    assert "Homebrew is not installed" in result.output
    assert fake_shell.commands == []


def test_brew_install_and_cask(fake_shell) -> None:
    fake_shell.present.add("brew")
    assert brew.install("jq").success
    assert brew.install_cask("vlc").success
    assert fake_shell.commands == ["brew install --quiet jq", "brew install --quiet --cask vlc"]


def test_brew_version(fake_shell) -> None:
    fake_shell.present.add("brew")
    fake_shell.respond("brew --version", CommandResult(0, "Homebrew 4.3.12\nHomebrew/homebrew-core (git revision 1)\n"))
    assert brew.get_version() == "4.3.12"


def test_apt_install_joins_packages(fake_shell) -> None:
    fake_shell.present.add("apt-get")
    apt.install(["ca-certificates", "curl"])
    assert fake_shell.commands == [
        "sudo DEBIAN_FRONTEND=noninteractive apt-get install -y ca-certificates curl",
    ]


def test_apt_unavailable(fake_shell) -> None:
    assert apt.update() == PackageResult(False, "apt-get is not available")


def test_apt_package_checks_use_dpkg(fake_shell) -> None:
    fake_shell.respond("dpkg -l jq", CommandResult(1))
    fake_shell.respond("dpkg -l curl", CommandResult(0, "7.88.1-10\n"))
    assert not apt.is_package_installed("jq")
    assert apt.is_package_installed("curl")
    assert apt.get_package_version("curl") == "7.88.1-10"


def test_package_queries_skip_missing_tools(fake_shell) -> None:
    fake_shell.present.clear()
    assert not apt.is_package_installed("curl")
    assert apt.get_package_version("curl") is None
    assert not dnf.is_package_installed("curl")
    assert not systemd.is_service_running("docker")
    assert fake_shell.commands == []


def test_dnf_prefers_dnf_over_yum(fake_shell) -> None:
    assert dnf.get_manager() is None
    fake_shell.present.add("yum")
    assert dnf.get_manager() == "yum"
    fake_shell.present.add("dnf")
    assert dnf.get_manager() == "dnf"
    dnf.install(["git", "jq"])
    assert fake_shell.commands[-1] == "sudo dnf install -y git jq"


def test_choco_checks_known_location(fake_shell, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(choco, "CHOCO_KNOWN_PATH", str(tmp_path / "missing.exe"))
    monkeypatch.setattr(choco, "GITBASH_CHOCO_PATH", str(tmp_path / "also-missing.exe"))
    assert choco.get_executable_path() is None
    assert not choco.install("jq").success

    exe = tmp_path / "choco.exe"
    exe.write_text("")
    monkeypatch.setattr(choco, "CHOCO_KNOWN_PATH", str(exe))
    assert choco.get_executable_path() == str(exe)

    choco.install("jq", version="1.7.1")
    assert fake_shell.commands[-1] == f'"{exe}" install jq -y --version 1.7.1'


def test_choco_package_version(fake_shell) -> None:
    fake_shell.present.add("choco")
    fake_shell.respond("list --local-only --exact git", CommandResult(0, "Chocolatey v2.2.2\ngit 2.45.1\n1 packages installed.\n"))
    assert choco.is_package_installed("git")
    assert choco.get_package_version("git") == "2.45.1"


def test_winget_install_flags(fake_shell) -> None:
    fake_shell.present.add("winget")
    winget.install("Git.Git")
    command = fake_shell.commands[-1]
    assert command.startswith('winget install --exact --id "Git.Git"')
    assert "--accept-package-agreements" in command
    assert command.endswith("--silent")


def test_systemd_unavailable_in_containers(fake_shell) -> None:
    fake_shell.present.add("systemctl")
    fake_shell.respond("is-system-running", CommandResult(1, "offline\n"))
    assert not systemd.is_available()
    assert not systemd.enable_service("docker.service").success
    assert not fake_shell.ran("systemctl enable")


def test_systemd_degraded_still_available(fake_shell) -> None:
    fake_shell.present.add("systemctl")
    fake_shell.respond("is-system-running", CommandResult(0, "degraded\n"))
    assert systemd.is_available()
    systemd.enable_service("docker.service", now=True)
    assert fake_shell.commands[-1] == "sudo systemctl enable --now docker.service"


def test_macos_app_lookup(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / "VLC.app").mkdir()
    monkeypatch.setattr(macos_apps, "APPLICATION_DIRS", (tmp_path,))
    assert macos_apps.is_app_installed("VLC")
    assert macos_apps.get_app_bundle_path("VLC.app") == tmp_path / "VLC.app"
    assert not macos_apps.is_app_installed("DBeaver")


def test_preferred_manager(fake_shell, set_platform) -> None:
    set_platform("fedora")
    assert package_manager.get_preferred() == "dnf"
    set_platform("gitbash")
    assert package_manager.get_preferred() == "choco"
    set_platform("linux")
    assert package_manager.get_preferred() is None
    assert not package_manager.install("jq").success


def test_available_managers(fake_shell, set_platform) -> None:
    set_platform("ubuntu")
    fake_shell.present.update({"apt-get", "snap", "pip3"})
    assert package_manager.get_available() == ["apt", "snap", "pip"]


def test_install_dispatches_to_wrapper(fake_shell, set_platform) -> None:
    set_platform("ubuntu")
    fake_shell.present.add("apt-get")
    assert package_manager.install("jq").success
    assert fake_shell.commands == ["sudo DEBIAN_FRONTEND=noninteractive apt-get install -y jq"]

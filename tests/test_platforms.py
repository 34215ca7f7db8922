from __future__ import annotations

from pathlib import Path

import pytest

from devutils_cli import platforms
from devutils_cli.errors import UnsupportedPlatformError
from devutils_cli.platforms import Platform


@pytest.fixture()
def linux_host(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Point every release-file lookup into ``tmp_path``."""
    monkeypatch.setattr(platforms, "_system", lambda: "linux")
    monkeypatch.delenv("WSL_DISTRO_NAME", raising=False)
    monkeypatch.setattr(platforms, "OS_RELEASE_PATH", tmp_path / "os-release")
    monkeypatch.setattr(platforms, "LSB_RELEASE_PATH", tmp_path / "lsb-release")
    monkeypatch.setattr(platforms, "DEBIAN_VERSION_PATH", tmp_path / "debian_version")
    monkeypatch.setattr(platforms, "REDHAT_RELEASE_PATHS", (tmp_path / "redhat-release", tmp_path / "system-release"))
    monkeypatch.setattr(platforms, "DNF_PATH", tmp_path / "dnf")
    return tmp_path


def test_macos(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(platforms, "_system", lambda: "darwin")
    assert platforms.detect() == Platform("macos", "brew", "macos")


def test_windows_and_git_bash(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(platforms, "_system", lambda: "win32")
    monkeypatch.delenv("WSL_DISTRO_NAME", raising=False)
    monkeypatch.delenv("MSYSTEM", raising=False)
    assert platforms.detect().type == "windows"

    monkeypatch.setenv("MSYSTEM", "MINGW64")
    detected = platforms.detect()
    assert detected.type == "gitbash"
    assert detected.package_manager == "choco"


def test_wsl_takes_precedence(linux_host: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WSL_DISTRO_NAME", "Ubuntu-22.04")
    (linux_host / "debian_version").write_text("bookworm/sid\n")
    assert platforms.detect() == Platform("wsl", "apt", "ubuntu-22.04")


@pytest.mark.parametrize(
    ("distro_id", "expected"),
    [("ubuntu", "ubuntu"), ("debian", "debian"), ("raspbian", "raspbian"), ("linuxmint", "debian")],
)
def test_debian_family(linux_host: Path, distro_id: str, expected: str) -> None:
    (linux_host / "os-release").write_text(f'NAME="Some Linux"\nID={distro_id}\nVERSION_ID="12"\n')
    (linux_host / "debian_version").write_text("12.5\n")
    detected = platforms.detect()
    assert detected.type == expected
    assert detected.package_manager == "apt"
    assert detected.distro == distro_id


def test_amazon_linux_uses_yum_without_dnf(linux_host: Path) -> None:
    (linux_host / "os-release").write_text('ID="amzn"\nVERSION_ID="2"\n')
    (linux_host / "system-release").write_text("Amazon Linux release 2\n")
    assert platforms.detect() == Platform("amazon_linux", "yum", "amzn")


def test_fedora_uses_dnf(linux_host: Path) -> None:
    (linux_host / "os-release").write_text("ID=fedora\n")
    (linux_host / "redhat-release").write_text("Fedora release 40\n")
    (linux_host / "dnf").write_text("")
    assert platforms.detect() == Platform("fedora", "dnf", "fedora")


def test_unrecognised_linux(linux_host: Path) -> None:
    (linux_host / "os-release").write_text("ID=arch\n")
    assert platforms.detect() == Platform("linux", None, "arch")


def test_distro_falls_back_to_lsb_release(linux_host: Path) -> None:
    (linux_host / "lsb-release").write_text("DISTRIB_ID=Ubuntu\nDISTRIB_RELEASE=22.04\n")
    assert platforms.get_distro() == "ubuntu"


@pytest.mark.parametrize(
    ("machine", "expected"),
    [("x86_64", "x64"), ("AMD64", "x64"), ("aarch64", "arm64"), ("armv7l", "arm"), ("i686", "ia32"), ("riscv64", "riscv64")],
)
def test_get_arch(monkeypatch: pytest.MonkeyPatch, machine: str, expected: str) -> None:
    monkeypatch.setattr(platforms._platform, "machine", lambda: machine)
    assert platforms.get_arch() == expected


def test_headless_linux_has_no_desktop(set_platform, monkeypatch: pytest.MonkeyPatch) -> None:
    set_platform("ubuntu")
    for var in ("DISPLAY", "WAYLAND_DISPLAY", "XDG_SESSION_TYPE", "XDG_CURRENT_DESKTOP", "DESKTOP_SESSION"):
        monkeypatch.delenv(var, raising=False)
    assert platforms.is_desktop_available() is False

    monkeypatch.setenv("DISPLAY", ":0")
    assert platforms.is_desktop_available() is True


def test_macos_always_has_desktop(set_platform) -> None:
    set_platform("macos")
    assert platforms.is_desktop_available() is True


def test_resolve_handler() -> None:
    handlers = {"macos": lambda: "mac"}
    assert platforms.resolve_handler(handlers, "macos")() == "mac"
    assert platforms.resolve_handler(handlers, "windows") is None


def test_label() -> None:
    assert Platform("amazon_linux").label == "Amazon Linux"
    assert Platform("gitbash").label == "Git Bash"


def test_require_handler_raises_on_miss() -> None:
    with pytest.raises(UnsupportedPlatformError) as excinfo:
        platforms.require_handler({"macos": print}, "rhel")
    assert excinfo.value.platform_type == "rhel"

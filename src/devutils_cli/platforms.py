"""Platform detection and dispatch.

``detect()`` classifies the host into one of a fixed set of platform types.
Installers and scripts keep a dict from those types to handler functions and
look the current one up with ``resolve_handler``.
"""

import logging
import os
import platform as _platform
import re
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .errors import UnsupportedPlatformError

logger = logging.getLogger(__name__)

PLATFORM_TYPES = (
    "macos",
    "ubuntu",
    "debian",
    "raspbian",
    "amazon_linux",
    "fedora",
    "rhel",
    "linux",
    "wsl",
    "windows",
    "gitbash",
)

LINUX_TYPES = {"ubuntu", "debian", "raspbian", "amazon_linux", "fedora", "rhel", "linux", "wsl"}

PLATFORM_LABELS = {
    "macos": "macOS",
    "ubuntu": "Ubuntu",
    "debian": "Debian",
    "raspbian": "Raspberry Pi OS",
    "amazon_linux": "Amazon Linux",
    "fedora": "Fedora",
    "rhel": "RHEL",
    "linux": "Linux",
    "wsl": "WSL",
    "windows": "Windows",
    "gitbash": "Git Bash",
    "unknown": "Unknown",
}

OS_RELEASE_PATH = Path("/etc/os-release")
LSB_RELEASE_PATH = Path("/etc/lsb-release")
DEBIAN_VERSION_PATH = Path("/etc/debian_version")
REDHAT_RELEASE_PATHS = (Path("/etc/redhat-release"), Path("/etc/system-release"))
DNF_PATH = Path("/usr/bin/dnf")
WSLG_PATH = Path("/mnt/wslg")

_ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "armv6l": "arm",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
}


@dataclass(frozen=True)
class Platform:
    type: str
    package_manager: Optional[str] = None
    distro: Optional[str] = None

    @property
    def label(self) -> str:
        return PLATFORM_LABELS.get(self.type, self.type)


def _system() -> str:
    return sys.platform


def _read_release_id(path: Path, key: str) -> Optional[str]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError:
        return None
    match = re.search(rf"^{key}=[\"']?([^\"'\n]+)[\"']?", content, re.MULTILINE)
    return match.group(1).lower() if match else None


def get_distro() -> Optional[str]:
    """Return the Linux distribution id (``ubuntu``, ``debian``, ``amzn``...) or None."""
    if not _system().startswith("linux"):
        return None
    if OS_RELEASE_PATH.exists():
        distro = _read_release_id(OS_RELEASE_PATH, "ID")
        if distro:
            return distro
    if LSB_RELEASE_PATH.exists():
        return _read_release_id(LSB_RELEASE_PATH, "DISTRIB_ID")
    return None


def detect() -> Platform:
    """Detect the current platform."""
    system = _system()
    wsl_distro = os.environ.get("WSL_DISTRO_NAME")

    if system == "darwin":
        return Platform("macos", "brew", "macos")

    if system == "win32":
        if wsl_distro:
            return Platform("wsl", "apt", wsl_distro.lower())
        if os.environ.get("MSYSTEM"):
            return Platform("gitbash", "choco", "windows")
        return Platform("windows", "winget", "windows")

    if system.startswith("linux"):
        if wsl_distro:
            return Platform("wsl", "apt", wsl_distro.lower())

        distro = get_distro()

        if DEBIAN_VERSION_PATH.exists():
            if distro in ("raspbian", "raspberry"):
                kind = "raspbian"
            elif distro == "ubuntu":
                kind = "ubuntu"
            else:
                kind = "debian"
            return Platform(kind, "apt", distro)

        # Amazon Linux 2023 only ships /etc/system-release
        if any(p.exists() for p in REDHAT_RELEASE_PATHS):
            if distro in ("amzn", "amazon"):
                kind = "amazon_linux"
            elif distro == "fedora":
                kind = "fedora"
            else:
                kind = "rhel"
            return Platform(kind, "dnf" if DNF_PATH.exists() else "yum", distro)

        return Platform("linux", None, distro)

    return Platform("unknown")


def is_windows() -> bool:
    """True on native Windows (not WSL)."""
    return _system() == "win32" and not os.environ.get("WSL_DISTRO_NAME")


def is_macos() -> bool:
    return _system() == "darwin"


def is_linux() -> bool:
    return _system().startswith("linux")


def is_wsl() -> bool:
    return bool(os.environ.get("WSL_DISTRO_NAME"))


def get_arch() -> str:
    """CPU architecture using the short names ``x64``, ``arm64``, ``arm``, ``ia32``."""
    machine = _platform.machine().lower()
    return _ARCH_ALIASES.get(machine, machine)


def get_home_dir() -> Path:
    return Path.home()


def get_temp_dir() -> Path:
    return Path(tempfile.gettempdir())


def is_desktop_available() -> bool:
    """Whether GUI applications can be displayed on this machine.

    macOS, Windows and Git Bash always have a desktop. Linux and WSL need a
    display server or desktop session; headless servers and containers
    report False.
    """
    kind = detect().type
    if kind in ("macos", "windows", "gitbash"):
        return True
    if kind not in LINUX_TYPES:
        return False

    env = os.environ
    if env.get("WAYLAND_DISPLAY") or env.get("DISPLAY"):
        return True
    if env.get("XDG_SESSION_TYPE") in ("x11", "wayland"):
        return True
    if env.get("XDG_CURRENT_DESKTOP") or env.get("DESKTOP_SESSION"):
        return True
    if kind == "wsl" and WSLG_PATH.exists():
        return True
    return False


def resolve_handler(handlers: dict[str, Callable], platform_type: Optional[str] = None) -> Optional[Callable]:
    """Look up the handler for ``platform_type`` (the detected platform by default)."""
    if platform_type is None:
        platform_type = detect().type
    handler = handlers.get(platform_type)
    if handler is None:
        logger.debug("no handler for platform %s", platform_type)
    return handler


def require_handler(handlers: dict[str, Callable], platform_type: Optional[str] = None) -> Callable:
    """Like ``resolve_handler`` but raise UnsupportedPlatformError on a miss."""
    if platform_type is None:
        platform_type = detect().type
    handler = resolve_handler(handlers, platform_type)
    if handler is None:
        raise UnsupportedPlatformError(platform_type)
    return handler

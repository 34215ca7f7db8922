"""systemd service control."""

import logging

from .. import shell
from . import PackageResult

logger = logging.getLogger(__name__)


def is_available() -> bool:
    if not shell.command_exists("systemctl"):
        return False
    state = shell.run_quiet("systemctl is-system-running 2>/dev/null")
    # "degraded" still means systemd is PID 1; "offline" is the container case
    return state not in ("", "offline")


def is_service_running(service: str) -> bool:
    if not shell.command_exists("systemctl"):
        return False
    return shell.run_command(f"systemctl is-active {service}").ok


def start_service(service: str) -> PackageResult:
    if not is_available():
        return PackageResult.unavailable("systemd")
    return PackageResult.from_command(shell.run_command(f"sudo systemctl start {service}"))


def enable_service(service: str, now: bool = False) -> PackageResult:
    if not is_available():
        return PackageResult.unavailable("systemd")
    flag = " --now" if now else ""
    result = shell.run_command(f"sudo systemctl enable{flag} {service}")
    if not result.ok:
        logger.warning("Could not enable %s: %s", service, result.stderr.strip())
    return PackageResult.from_command(result)

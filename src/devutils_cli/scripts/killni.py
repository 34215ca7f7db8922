"""``killni``: kill Node.js processes started with a debugger/inspector flag."""

import logging

from .. import shell
from ..ui import console
from .common import LINUX_FAMILY, WINDOWS_FAMILY, dispatch, for_platforms

logger = logging.getLogger(__name__)

INSPECT_FLAGS = ("--debug-brk", "--inspect-brk", "--debug", "--inspect")


def _parse_pids(output: str) -> list[str]:
    return [token for token in output.split() if token.isdigit()]


def find_pids_unix() -> list[str]:
    pids = []
    for flag in INSPECT_FLAGS:
        for pid in _parse_pids(shell.run_quiet(f"pgrep -f 'node.*{flag}'")):
            if pid not in pids:
                pids.append(pid)
    return pids


def find_pids_windows() -> list[str]:
    conditions = " -or ".join(f"$_.CommandLine -like '*{flag}*'" for flag in INSPECT_FLAGS)
    script = (
        "Get-CimInstance Win32_Process | "
        f"Where-Object {{ $_.Name -eq 'node.exe' -and ({conditions}) }} | "
        "ForEach-Object { $_.ProcessId }"
    )
    return _parse_pids(shell.run_quiet(f'powershell -NoProfile -Command "{script}"'))


def kill_unix(pid: str) -> bool:
    return shell.run_command(f"kill -9 {pid}").ok


def kill_windows(pid: str) -> bool:
    return shell.run_command(f"taskkill /F /PID {pid}").ok


def kill_matching(find, kill) -> None:
    pids = find()
    if not pids:
        console.print("No Node inspector processes found.")
        return
    for pid in pids:
        if kill(pid):
            console.print(f"Killed process {pid}")
        else:
            logger.warning("could not kill process %s", pid)
            console.print(f"[yellow]Could not kill process {pid}[/yellow]")


def killni_unix() -> None:
    kill_matching(find_pids_unix, kill_unix)


def killni_windows() -> None:
    kill_matching(find_pids_windows, kill_windows)


HANDLERS = {
    "macos": killni_unix,
    **for_platforms(killni_unix, LINUX_FAMILY),
    **for_platforms(killni_windows, WINDOWS_FAMILY),
}


def killni():
    """Kill Node.js processes running with --inspect or --debug flags."""
    dispatch("killni", HANDLERS)

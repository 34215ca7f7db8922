"""Shell command execution helpers.

Every installer and script goes through this module so tests can swap
``run_command`` and ``command_exists`` for recording fakes.
"""

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

TIMEOUT_EXIT_CODE = 124


@dataclass(frozen=True)
class CommandResult:
    code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.code == 0

    @property
    def output(self) -> str:
        """stdout when present, otherwise stderr."""
        return self.stdout or self.stderr


def run_command(command: str, *, cwd: Optional[str] = None, env: Optional[dict] = None, timeout: Optional[float] = None) -> CommandResult:
    """Run a shell command string and capture its output.

    Never raises for a failing command: non-zero exits, missing executables
    and timeouts all come back as a non-zero ``code``.
    """
    logger.debug("exec: %s", command)
    try:
        proc = subprocess.run(
            command,
            shell=True,
            cwd=cwd,
            env=env if env is not None else os.environ.copy(),
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        stdout = e.stdout.decode() if isinstance(e.stdout, bytes) else (e.stdout or "")
        logger.debug("timed out after %ss: %s", timeout, command)
        return CommandResult(TIMEOUT_EXIT_CODE, stdout, f"Command timed out after {timeout}s: {command}")
    except OSError as e:
        logger.debug("failed to start %s: %s", command, e)
        return CommandResult(1, "", str(e))

    if proc.returncode != 0:
        logger.debug("exit %s: %s", proc.returncode, command)
    return CommandResult(proc.returncode, proc.stdout or "", proc.stderr or "")


def run_quiet(command: str, *, cwd: Optional[str] = None, timeout: Optional[float] = None) -> str:
    """Return stripped stdout of ``command``, or an empty string on failure."""
    result = run_command(command, cwd=cwd, timeout=timeout)
    return result.stdout.strip() if result.ok else ""


def run_interactive(argv: list[str], cwd: Optional[str] = None) -> int:
    """Run ``argv`` attached to the terminal and return its exit code."""
    logger.debug("spawn: %s", " ".join(argv))
    try:
        return subprocess.run(argv, cwd=cwd).returncode
    except FileNotFoundError:
        logger.debug("executable not found: %s", argv[0])
        return 127


def which(executable: str) -> Optional[str]:
    """Locate ``executable`` on PATH (honours PATHEXT on Windows)."""
    return shutil.which(executable)


def command_exists(command: str) -> bool:
    return which(command) is not None

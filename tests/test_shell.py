from __future__ import annotations

import sys

import pytest

from devutils_cli import shell
from devutils_cli.shell import CommandResult

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="uses POSIX shell commands")


def test_captures_stdout() -> None:
    result = shell.run_command("echo hello")
    assert result.ok
    assert result.stdout.strip() == "hello"


def test_non_zero_exit_is_returned_not_raised() -> None:
    result = shell.run_command("echo oops >&2; exit 3")
    assert result.code == 3
    assert not result.ok
    assert result.stderr.strip() == "oops"
    assert result.output.strip() == "oops"


def test_timeout_reports_exit_code_124() -> None:
    result = shell.run_command("sleep 5", timeout=0.2)
    assert result.code == shell.TIMEOUT_EXIT_CODE
    assert "timed out" in result.stderr


def test_missing_cwd_is_a_failure(tmp_path) -> None:
    result = shell.run_command("true", cwd=str(tmp_path / "missing"))
    assert result.code == 1


def test_run_quiet() -> None:
    assert shell.run_quiet("printf '  padded  '") == "padded"
    assert shell.run_quiet("exit 1") == ""


def test_run_interactive_missing_executable() -> None:
    assert shell.run_interactive(["definitely-not-a-real-command-xyz"]) == 127


def test_command_exists() -> None:
    assert shell.command_exists("sh")
    assert not shell.command_exists("definitely-not-a-real-command-xyz")


def test_command_result_output_prefers_stdout() -> None:
    assert CommandResult(0, "out", "err").output == "out"
    assert CommandResult(1, "", "err").output == "err"

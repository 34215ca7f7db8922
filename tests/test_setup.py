from __future__ import annotations

from typer.testing import CliRunner

from devutils_cli import app
from devutils_cli.shell import CommandResult

runner = CliRunner()

ESSENTIALS = {"git", "ssh-keygen", "gpg", "curl"}


def test_nothing_to_do(fake_shell, set_platform) -> None:
    set_platform("ubuntu")
    fake_shell.present.update(ESSENTIALS)
    result = runner.invoke(app, ["setup"])
    assert result.exit_code == 0
    assert "All essential tools are already installed." in result.output


def test_check_only_reports(fake_shell, set_platform) -> None:
    set_platform("ubuntu")
    fake_shell.present.update(ESSENTIALS - {"gpg"})
    result = runner.invoke(app, ["setup", "--check"])
    assert result.exit_code == 0
    assert "Missing" in result.output
    assert "Run dev setup to install missing tools." in result.output
    assert fake_shell.commands == []


def test_installs_missing_tool(fake_shell, set_platform) -> None:
    set_platform("ubuntu")
    fake_shell.present.update((ESSENTIALS - {"curl"}) | {"apt-get"})
    fake_shell.provides("apt-get install -y curl", "curl")
    result = runner.invoke(app, ["setup", "--force"])
    assert result.exit_code == 0
    assert "Setup complete: 1 installed, 0 failed." in result.output


def test_failed_tool_exits_non_zero(fake_shell, set_platform) -> None:
    set_platform("ubuntu")
    fake_shell.present.update((ESSENTIALS - {"curl"}) | {"apt-get"})
    fake_shell.respond("apt-get install -y curl", CommandResult(100, "", "E: no network"))
    result = runner.invoke(app, ["setup", "--force"])
    assert result.exit_code == 1
    assert "0 installed, 1 failed" in result.output

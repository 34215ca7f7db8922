from __future__ import annotations

import httpx
import pytest
from typer.testing import CliRunner

from devutils_cli import app
from devutils_cli.commands import version as version_cmd

runner = CliRunner()


@pytest.mark.parametrize(
    ("current", "latest", "expected"),
    [
        ("1.2.3", "1.2.4", True),
        ("1.2.3", "1.10.0", True),
        ("1.2.3", "1.2.3", False),
        ("2.0.0", "1.9.9", False),
        ("0.0.0.dev0", "0.1.0", True),
        ("0.4.0", "0.4.0rc2", False),
        ("0.4.0rc2", "0.4.0", True),
        ("0.4.0rc1", "0.4.0rc2", True),
        ("not-a-version", "1.0.0", False),
        ("1.2", "1.2.1", True),
        (None, "1.0.0", False),
        ("1.0.0", None, False),
    ],
)
def test_is_newer_version(current, latest, expected) -> None:
    assert version_cmd.is_newer_version(current, latest) is expected


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_latest_version_from_pypi() -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"info": {"version": "1.4.0"}})

    assert version_cmd.get_latest_version(_client(handler)) == "1.4.0"
    assert seen == [version_cmd.DEFAULT_PYPI_URL]


def test_latest_version_honours_url_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(version_cmd.PYPI_URL_ENV, "https://mirror.example/pypi/devutils-cli/json")
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.host)
        return httpx.Response(200, json={"info": {"version": "1.0.0"}})

    version_cmd.get_latest_version(_client(handler))
    assert seen == ["mirror.example"]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500),
        httpx.Response(200, text="<html>"),
        httpx.Response(200, json={"releases": {}}),
    ],
)
def test_latest_version_failures_return_none(response: httpx.Response) -> None:
    assert version_cmd.get_latest_version(_client(lambda request: response)) is None


def test_version_reports_available_update(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(version_cmd, "current_version", lambda: "1.0.0")
    monkeypatch.setattr(version_cmd, "get_latest_version", lambda: "1.1.0")
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "Update available: 1.0.0 -> 1.1.0" in result.output


def test_version_offline(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(version_cmd, "get_latest_version", lambda: None)
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "Unable to check for updates" in result.output


def test_update_runs_pip(fake_shell, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(version_cmd, "current_version", lambda: "1.0.0")
    monkeypatch.setattr(version_cmd, "get_latest_version", lambda: "1.1.0")
    result = runner.invoke(app, ["update"])
    assert result.exit_code == 0
    assert fake_shell.ran("-m pip install --upgrade devutils-cli==1.1.0")
    assert "Installing devutils-cli==1.1.0" in result.output
    assert "Successfully updated to version 1.1.0" in result.output


def test_update_failure(fake_shell, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(version_cmd, "current_version", lambda: "1.0.0")
    monkeypatch.setattr(version_cmd, "get_latest_version", lambda: "1.1.0")
    fake_shell.interactive_code = 1
    result = runner.invoke(app, ["update"])
    assert result.exit_code == 1
    assert "Update failed." in result.output


def test_update_when_current(fake_shell, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(version_cmd, "current_version", lambda: "1.1.0")
    monkeypatch.setattr(version_cmd, "get_latest_version", lambda: "1.1.0")
    result = runner.invoke(app, ["update"])
    assert result.exit_code == 0
    assert fake_shell.commands == []

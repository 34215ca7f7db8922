from __future__ import annotations

from typing import Iterator

import pytest

from devutils_cli import platforms, shell, ui
from devutils_cli.platforms import Platform
from devutils_cli.shell import CommandResult

PACKAGE_MANAGERS = {
    "macos": "brew",
    "ubuntu": "apt",
    "debian": "apt",
    "raspbian": "apt",
    "wsl": "apt",
    "amazon_linux": "dnf",
    "fedora": "dnf",
    "rhel": "dnf",
    "windows": "winget",
    "gitbash": "choco",
}


class FakeShell:
    """Records commands instead of running them.

    ``respond(fragment, *results)`` answers commands containing ``fragment``;
    results are consumed in order and the last one repeats. Anything
    unmatched succeeds with empty output. ``present`` is the set of
    executables ``command_exists`` reports; the package databases are there
    unless a test discards them.
    """

    def __init__(self) -> None:
        self.commands: list[str] = []
        self.present: set[str] = {"dpkg", "rpm"}
        self.interactive_code = 0
        self._responses: list[tuple[str, list[CommandResult]]] = []
        self._provides: list[tuple[str, str]] = []

    def respond(self, fragment: str, *results: CommandResult) -> None:
        self._responses.append((fragment, list(results)))

    def provides(self, fragment: str, executable: str) -> None:
        """Make ``executable`` appear once a command containing ``fragment`` runs."""
        self._provides.append((fragment, executable))

    def run_command(self, command, *, cwd=None, env=None, timeout=None) -> CommandResult:
        self.commands.append(command)
        for fragment, executable in self._provides:
            if fragment in command:
                self.present.add(executable)
        for fragment, results in self._responses:
            if fragment in command:
                return results.pop(0) if len(results) > 1 else results[0]
        return CommandResult(0)

    def run_interactive(self, argv, cwd=None) -> int:
        self.commands.append(" ".join(argv))
        return self.interactive_code

    def which(self, executable):
        return f"/usr/bin/{executable}" if executable in self.present else None

    def ran(self, fragment: str) -> bool:
        return any(fragment in command for command in self.commands)

    def index(self, fragment: str) -> int:
        for i, command in enumerate(self.commands):
            if fragment in command:
                return i
        raise AssertionError(f"no command containing {fragment!r} in {self.commands}")


@pytest.fixture()
def fake_shell(monkeypatch: pytest.MonkeyPatch) -> Iterator[FakeShell]:
    fake = FakeShell()
    monkeypatch.setattr(shell, "run_command", fake.run_command)
    monkeypatch.setattr(shell, "run_interactive", fake.run_interactive)
    monkeypatch.setattr(shell, "which", fake.which)
    yield fake


@pytest.fixture()
def set_platform(monkeypatch: pytest.MonkeyPatch):
    """Pretend to run on ``kind`` with the given CPU architecture."""

    def _set(kind: str, arch: str = "x64", distro: str | None = None) -> Platform:
        current = Platform(kind, PACKAGE_MANAGERS.get(kind), distro or kind)
        monkeypatch.setattr(platforms, "detect", lambda: current)
        monkeypatch.setattr(platforms, "get_arch", lambda: arch)
        return current

    return _set


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("DEVUTILS_CONFIG", str(tmp_path / "devutils.json"))
    monkeypatch.setenv("DEVUTILS_NO_BANNER", "1")
    monkeypatch.delenv("DEVUTILS_LOG_FILE", raising=False)
    # keep long paths on one line in captured output
    monkeypatch.setattr(ui.console, "width", 200)

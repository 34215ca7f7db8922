from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from devutils_cli import app, gitignore

runner = CliRunner()


def test_marker_helpers() -> None:
    start, end = gitignore.section_markers("node")
    content = gitignore.add_patterns("dist/\n\n", "node", "node_modules/\n")
    assert content == f"dist/\n{start}\nnode_modules/\n{end}\n"
    assert gitignore.has_patterns(content, "node")
    assert not gitignore.has_patterns(content, "python")
    assert gitignore.remove_patterns(content, "node") == "dist/"


def test_remove_keeps_other_sections() -> None:
    content = gitignore.add_patterns("", "node", "node_modules/")
    content = gitignore.add_patterns(content, "python", "__pycache__/")
    stripped = gitignore.remove_patterns(content, "node")
    assert not gitignore.has_patterns(stripped, "node")
    assert gitignore.has_patterns(stripped, "python")
    assert "node_modules/" not in stripped


def test_pattern_files_ship_with_package() -> None:
    technologies = gitignore.available_technologies()
    assert {"python", "node", "macos"} <= set(technologies)
    assert "__pycache__/" in gitignore.read_patterns("python")


def test_find_git_root(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert gitignore.find_git_root(nested) == tmp_path.resolve()


def test_appends_section(tmp_path: Path) -> None:
    (tmp_path / ".gitignore").write_text("*.log\n", encoding="utf-8")
    result = runner.invoke(app, ["ignore", "python", str(tmp_path)])
    assert result.exit_code == 0
    content = (tmp_path / ".gitignore").read_text(encoding="utf-8")
    assert content.startswith("*.log\n")
    assert "# === @devutils: python ===" in content
    assert content.endswith("# === end: python ===\n")


def test_existing_section_is_left_alone_without_force(tmp_path: Path) -> None:
    runner.invoke(app, ["ignore", "python", str(tmp_path)])
    before = (tmp_path / ".gitignore").read_text(encoding="utf-8")
    result = runner.invoke(app, ["ignore", "python", str(tmp_path)])
    assert result.exit_code == 0
    assert "already present" in result.output
    assert (tmp_path / ".gitignore").read_text(encoding="utf-8") == before


def test_force_replaces_section(tmp_path: Path) -> None:
    start, _ = gitignore.section_markers("python")
    (tmp_path / ".gitignore").write_text(f"{start}\nstale-entry\n# === end: python ===\n", encoding="utf-8")
    result = runner.invoke(app, ["ignore", "python", str(tmp_path), "--force"])
    assert result.exit_code == 0
    content = (tmp_path / ".gitignore").read_text(encoding="utf-8")
    assert content.count(start) == 1
    assert "stale-entry" not in content


def test_dry_run_writes_nothing(tmp_path: Path) -> None:
    result = runner.invoke(app, ["ignore", "node", str(tmp_path), "--dry-run"])
    assert result.exit_code == 0
    assert "node_modules/" in result.output
    assert not (tmp_path / ".gitignore").exists()


def test_defaults_to_git_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".git").mkdir()
    sub = tmp_path / "src"
    sub.mkdir()
    monkeypatch.chdir(sub)
    result = runner.invoke(app, ["ignore", "macos"])
    assert result.exit_code == 0
    assert (tmp_path / ".gitignore").exists()
    assert not (sub / ".gitignore").exists()


def test_outside_a_repository(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(gitignore, "find_git_root", lambda start=None: None)
    result = runner.invoke(app, ["ignore", "macos"])
    assert result.exit_code == 1
    assert "No git repository found." in result.output


def test_unknown_technology(tmp_path: Path) -> None:
    result = runner.invoke(app, ["ignore", "cobol", str(tmp_path)])
    assert result.exit_code == 1
    assert 'Unknown technology "cobol"' in result.output


def test_missing_folder(tmp_path: Path) -> None:
    result = runner.invoke(app, ["ignore", "python", str(tmp_path / "nope")])
    assert result.exit_code == 1
    assert "does not exist" in result.output

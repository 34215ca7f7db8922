from __future__ import annotations

import json
import os
from pathlib import Path

from typer.testing import CliRunner

from devutils_cli import app, config, platforms

runner = CliRunner()


def _config_file() -> Path:
    return Path(os.environ["DEVUTILS_CONFIG"])


def test_config_lives_in_home_directory(monkeypatch, tmp_path) -> None:
    monkeypatch.delenv(config.CONFIG_ENV)
    monkeypatch.setattr(platforms, "get_home_dir", lambda: tmp_path)
    assert config.config_path() == tmp_path / ".devutils"


def test_build_config_keeps_created_timestamp() -> None:
    existing = {"user": {"name": "Old"}, "created": "2024-01-01T00:00:00Z", "extra": 1}
    updated = config.build_config("Ada", "ada@example.com", existing=existing)
    assert updated["user"] == {"name": "Ada", "email": "ada@example.com", "url": ""}
    assert updated["created"] == "2024-01-01T00:00:00Z"
    assert updated["updated"].endswith("Z")
    assert updated["extra"] == 1


def test_unreadable_config_is_ignored() -> None:
    _config_file().write_text("{not json", encoding="utf-8")
    assert config.load_config() is None


def test_flags_write_config_without_prompting() -> None:
    result = runner.invoke(app, ["configure", "--name", "Ada", "--email", "ada@example.com"])
    assert result.exit_code == 0
    assert "Configuration saved" in result.output
    saved = json.loads(_config_file().read_text(encoding="utf-8"))
    assert saved["user"]["email"] == "ada@example.com"
    assert saved["created"] == saved["updated"]


def test_show_without_config() -> None:
    result = runner.invoke(app, ["configure", "--show"])
    assert result.exit_code == 0
    assert "No configuration found." in result.output


def test_interactive_update_keeps_defaults() -> None:
    config.save_config(
        {
            "user": {"name": "Ada", "email": "ada@example.com", "url": ""},
            "created": "2024-01-01T00:00:00Z",
            "updated": "2024-01-01T00:00:00Z",
        }
    )
    result = runner.invoke(app, ["configure"], input="y\nGrace\n\n\n")
    assert result.exit_code == 0
    saved = config.load_config()
    assert saved["user"] == {"name": "Grace", "email": "ada@example.com", "url": ""}
    assert saved["created"] == "2024-01-01T00:00:00Z"


def test_declining_update_leaves_file_alone() -> None:
    config.save_config({"user": {"name": "Ada", "email": "ada@example.com", "url": ""}})
    before = _config_file().read_text(encoding="utf-8")
    result = runner.invoke(app, ["configure"], input="n\n")
    assert result.exit_code == 0
    assert "Configuration unchanged." in result.output
    assert _config_file().read_text(encoding="utf-8") == before


def test_required_name() -> None:
    result = runner.invoke(app, ["configure"], input="\n")
    assert result.exit_code == 1
    assert "Name is required." in result.output
    assert not _config_file().exists()

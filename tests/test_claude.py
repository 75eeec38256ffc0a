import json
import os

import pytest

from ccstatus import claude


def _read(path):
    with open(path, encoding="utf-8") as handle:
        return json.load(handle)


def _text(path):
    with open(path, encoding="utf-8") as handle:
        return handle.read()


def test_dir_default(tmp_path, monkeypatch):
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", "")
    monkeypatch.setenv("HOME", str(tmp_path))
    assert claude.claude_dir() == os.path.join(str(tmp_path), ".claude")


def test_dir_env_override(monkeypatch):
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", "/tmp/custom-claude")
    assert claude.claude_dir() == "/tmp/custom-claude"


def test_settings_path(monkeypatch):
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", "/tmp/test-claude")
    assert claude.settings_path() == "/tmp/test-claude/settings.json"


def test_status_line_to_dict():
    assert claude.StatusLine().to_dict() == {"type": "command", "command": "ccstatus", "padding": 0}


def test_fresh_install(tmp_path, monkeypatch):
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", str(tmp_path))
    path = claude.install()
    assert path == os.path.join(str(tmp_path), "settings.json")
    status_line = _read(path)["statusLine"]
    assert status_line["type"] == "command"
    assert status_line["command"] == "ccstatus"
    assert status_line["padding"] == 0


def test_install_creates_missing_directory(tmp_path, monkeypatch):
    target = tmp_path / "nested" / "claude"
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", str(target))
    path = claude.install()
    assert path == os.path.join(str(target), "settings.json")
    assert _read(path)["statusLine"]["command"] == "ccstatus"


def test_install_preserves_existing_fields(tmp_path, monkeypatch):
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", str(tmp_path))
    (tmp_path / "settings.json").write_text(
        '{\n  "theme": "dark",\n  "autoUpdaterStatus": "disabled"\n}\n'
    )
    path = claude.install()
    assert path == os.path.join(str(tmp_path), "settings.json")
    settings = _read(path)
    assert settings["theme"] == "dark"
    assert settings["autoUpdaterStatus"] == "disabled"
    assert settings["statusLine"]["command"] == "ccstatus"


def test_install_idempotent(tmp_path, monkeypatch):
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", str(tmp_path))
    first_path = claude.install()
    first = _text(first_path)
    second_path = claude.install()
    second = _text(second_path)
    assert first_path == second_path
    assert first == second
    assert _read(second_path)["statusLine"]["command"] == "ccstatus"


def test_install_invalid_json(tmp_path, monkeypatch):
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", str(tmp_path))
    (tmp_path / "settings.json").write_text("{invalid}")
    with pytest.raises(ValueError):
        claude.install()


def test_uninstall_removes_status_line(tmp_path, monkeypatch):
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", str(tmp_path))
    (tmp_path / "settings.json").write_text(
        '{\n  "theme": "dark",\n  "statusLine": {\n    "type": "command",\n'
        '    "command": "ccstatus",\n    "padding": 0\n  }\n}\n'
    )
    path = claude.uninstall()
    assert path == os.path.join(str(tmp_path), "settings.json")
    settings = _read(path)
    assert settings["theme"] == "dark"
    assert "statusLine" not in settings


def test_uninstall_no_file(tmp_path, monkeypatch):
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", str(tmp_path))
    path = claude.uninstall()
    assert path == os.path.join(str(tmp_path), "settings.json")
    assert not (tmp_path / "settings.json").exists()


def test_uninstall_without_status_line_leaves_file(tmp_path, monkeypatch):
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", str(tmp_path))
    original = '{\n  "theme": "dark"\n}\n'
    (tmp_path / "settings.json").write_text(original)
    path = claude.uninstall()
    assert path == os.path.join(str(tmp_path), "settings.json")
    assert _text(path) == original
    assert _read(path)["theme"] == "dark"


def test_uninstall_invalid_json(tmp_path, monkeypatch):
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", str(tmp_path))
    (tmp_path / "settings.json").write_text("{invalid}")
    with pytest.raises(ValueError):
        claude.uninstall()
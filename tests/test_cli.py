import io
import json
import os
import sys

import pytest

from ccstatus import config
from ccstatus.cli import main, write_dump
from ccstatus.config import Settings, WidgetItem


@pytest.fixture
def xdg(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    return tmp_path / "xdg"


def _stdin(monkeypatch, data: bytes):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))


def _save_simple_settings(items):
    config.save(Settings(version=4, lines=[items], color_level=0, default_padding=" "))


def test_write_dump_pretty_prints_json(tmp_path):
    path = tmp_path / "dump.json"
    payload = {"model": {"id": "claude-opus-4-6"}, "version": "1.0.80"}
    write_dump(json.dumps(payload).encode(), str(path))
    text = path.read_text()
    assert json.loads(text) == payload
    assert text.endswith("\n")
    assert '\n  "model"' in text


def test_write_dump_keeps_invalid_json_raw(tmp_path):
    path = tmp_path / "dump.json"
    write_dump(b"{invalid}", str(path))
    assert path.read_bytes() == b"{invalid}"


def test_write_dump_file_is_private(tmp_path):
    path = tmp_path / "dump.json"
    write_dump(b"{}", str(path))
    assert os.stat(path).st_mode & 0o777 == 0o600


def test_init_creates_default_settings(xdg, capsys):
    assert main(["init"]) == 0
    assert config.load() == config.default_settings()
    assert "Created" in capsys.readouterr().err


def test_init_refuses_to_overwrite(xdg, capsys):
    assert main(["init"]) == 0
    capsys.readouterr()
    assert main(["init"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: settings already exist at")
    assert "--force" in err


def test_init_force_overwrites(xdg):
    config.save(Settings(version=1))
    assert main(["init", "--force"]) == 0
    assert config.load().version == config.CURRENT_VERSION


def test_install_and_uninstall(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", str(tmp_path))
    assert main(["install"]) == 0
    settings = json.loads((tmp_path / "settings.json").read_text())
    assert settings["statusLine"]["command"] == "ccstatus"
    assert "installed successfully" in capsys.readouterr().err

    assert main(["uninstall"]) == 0
    settings = json.loads((tmp_path / "settings.json").read_text())
    assert "statusLine" not in settings


def test_install_invalid_json_fails(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", str(tmp_path))
    (tmp_path / "settings.json").write_text("{invalid}")
    assert main(["install"]) == 1
    assert capsys.readouterr().err.startswith("Error: ")


def test_validate_warns_about_unknown_widgets(xdg, capsys):
    _save_simple_settings([WidgetItem(id="1", type="bogus"), WidgetItem(id="2", type="model")])
    assert main(["validate"]) == 0
    err = capsys.readouterr().err
    assert 'Warning: unknown widget type: "bogus"' in err
    assert "model" not in err
    assert "Settings are valid" in err


def test_validate_rejects_invalid_json(xdg, capsys):
    directory = xdg / "ccstatus"
    directory.mkdir(parents=True)
    (directory / "settings.json").write_text("{invalid}")
    assert main(["validate"]) == 1
    assert capsys.readouterr().err.startswith("Error: invalid settings")


def test_status_line_renders_from_stdin(xdg, monkeypatch, capsys):
    _save_simple_settings([WidgetItem(id="1", type="model")])
    _stdin(monkeypatch, b'{"model":{"id":"claude-sonnet-4-5","display_name":"Sonnet"}}')
    assert main([]) == 0
    assert capsys.readouterr().out == "\x1b[0mSonnet\n"


def test_status_line_skips_empty_lines(xdg, monkeypatch, capsys):
    _save_simple_settings([WidgetItem(id="1", type="version")])
    _stdin(monkeypatch, b"{}")
    assert main([]) == 0
    assert capsys.readouterr().out == ""


def test_status_line_invalid_json(xdg, monkeypatch, capsys):
    _stdin(monkeypatch, b"{invalid}")
    assert main([]) == 1
    assert capsys.readouterr().err.startswith("Error: parsing JSON")


def test_dump_writes_file_and_renders(xdg, tmp_path, monkeypatch, capsys):
    _save_simple_settings([WidgetItem(id="1", type="model")])
    payload = b'{"model":"claude-opus-4-6"}'
    _stdin(monkeypatch, payload)
    target = tmp_path / "out.json"
    assert main(["dump", "-o", str(target)]) == 0
    captured = capsys.readouterr()
    assert json.loads(target.read_text()) == json.loads(payload)
    assert f"Dumped JSON to {target}" in captured.err
    assert captured.out == "\x1b[0mOpus\n"


def test_version_flag_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.startswith("ccstatus version ")
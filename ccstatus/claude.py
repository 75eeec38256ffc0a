"""Registering ccstatus in Claude Code's own settings.json."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

SETTINGS_FILE_NAME = "settings.json"
STATUS_LINE_KEY = "statusLine"


@dataclass(frozen=True)
class StatusLine:
    """The block written under "statusLine"."""

    type: str = "command"
    command: str = "ccstatus"
    padding: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "command": self.command, "padding": self.padding}


def claude_dir() -> str:
    """Claude Code's configuration directory ($CLAUDE_CONFIG_DIR or ~/.claude)."""
    override = os.environ.get("CLAUDE_CONFIG_DIR", "")
    if override:
        return override
    try:
        home = str(Path.home())
    except RuntimeError:
        return ""
    return os.path.join(home, ".claude")


def settings_path() -> str:
    """Full path of Claude Code's settings.json."""
    return os.path.join(claude_dir(), SETTINGS_FILE_NAME)


def _parse(raw: bytes) -> dict[str, Any]:
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("settings: expected a JSON object")
    return data


def _read_settings(path: str) -> dict[str, Any]:
    try:
        with open(path, "rb") as handle:
            raw = handle.read()
    except FileNotFoundError:
        return {}
    return _parse(raw)


def _write_settings(path: str, settings: dict[str, Any]) -> None:
    os.makedirs(os.path.dirname(path) or ".", mode=0o755, exist_ok=True)
    text = json.dumps(settings, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(text)


def install() -> str:
    """Set ccstatus as the status line command, keeping every other field.

    Returns the path of the settings file that was written.
    """
    path = settings_path()
    settings = _read_settings(path)
    settings[STATUS_LINE_KEY] = StatusLine().to_dict()
    _write_settings(path, settings)
    return path


def uninstall() -> str:
    """Remove the status line entry; nothing happens when it is absent.

    Returns the path of the settings file.
    """
    path = settings_path()
    try:
        with open(path, "rb") as handle:
            raw = handle.read()
    except FileNotFoundError:
        return path
    settings = _parse(raw)
    if STATUS_LINE_KEY not in settings:
        return path
    del settings[STATUS_LINE_KEY]
    _write_settings(path, settings)
    return path
"""Loading, saving and defaults of the ccstatus settings file."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

CURRENT_VERSION = 4

CONFIG_DIR_NAME = "ccstatus"
CONFIG_FILE_NAME = "settings.json"


def _expect_str(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key}: expected a string")
    return value


def _expect_int(data: dict, key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key}: expected an integer")
    return value


def _expect_bool(data: dict, key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"{key}: expected a boolean")
    return value


def _expect_metadata(data: dict, key: str) -> dict[str, str]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict) or not all(isinstance(v, str) for v in value.values()):
        raise ValueError(f"{key}: expected an object of strings")
    return dict(value)


@dataclass
class WidgetItem:
    """One widget placed on a status line."""

    id: str = ""
    type: str = ""
    color: str = ""
    background_color: str = ""
    bold: bool = False
    prefix: str = ""
    suffix: str = ""
    character: str = ""
    raw_value: bool = False
    custom_text: str = ""
    command_path: str = ""
    max_width: int = 0
    preserve_colors: bool = False
    timeout: int = 0
    merge: Any = None
    metadata: dict[str, str] = field(default_factory=dict)

    # (attribute, JSON key, kind); id and type are always written.
    _SCHEMA = (
        ("id", "id", "str"),
        ("type", "type", "str"),
        ("color", "color", "str"),
        ("background_color", "backgroundColor", "str"),
        ("bold", "bold", "bool"),
        ("prefix", "prefix", "str"),
        ("suffix", "suffix", "str"),
        ("character", "character", "str"),
        ("raw_value", "rawValue", "bool"),
        ("custom_text", "customText", "str"),
        ("command_path", "commandPath", "str"),
        ("max_width", "maxWidth", "int"),
        ("preserve_colors", "preserveColors", "bool"),
        ("timeout", "timeout", "int"),
    )

    def is_merged(self) -> bool:
        """True when this widget merges with the one next to it."""
        if isinstance(self.merge, bool):
            return self.merge
        if isinstance(self.merge, str):
            return self.merge == "no-padding"
        return False

    def merge_no_padding(self) -> bool:
        """True when the merge mode is "no-padding"."""
        return isinstance(self.merge, str) and self.merge == "no-padding"

    def to_dict(self) -> dict[str, Any]:
        """JSON form; empty optional fields are left out."""
        out: dict[str, Any] = {}
        for attr, key, _ in self._SCHEMA:
            value = getattr(self, attr)
            if key in ("id", "type") or value:
                out[key] = value
        if self.merge is not None:
            out["merge"] = self.merge
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WidgetItem:
        """Build an item from its JSON form; raises ValueError on wrong types."""
        if not isinstance(data, dict):
            raise ValueError("widget item: expected a JSON object")
        readers = {"str": _expect_str, "int": _expect_int, "bool": _expect_bool}
        values = {attr: readers[kind](data, key) for attr, key, kind in cls._SCHEMA}
        return cls(
            **values,
            merge=data.get("merge"),
            metadata=_expect_metadata(data, "metadata"),
        )


@dataclass
class Settings:
    """The ccstatus configuration."""

    version: int = 0
    lines: list[list[WidgetItem]] = field(default_factory=list)
    flex_mode: str = ""
    compact_threshold: int = 0
    color_level: int = 0
    default_separator: str = ""
    default_padding: str = ""
    inherit_separator_colors: bool = False
    override_background_color: str = ""
    override_foreground_color: str = ""
    global_bold: bool = False

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "version": self.version,
            "lines": [[item.to_dict() for item in line] for line in self.lines],
            "flexMode": self.flex_mode,
            "compactThreshold": self.compact_threshold,
            "colorLevel": self.color_level,
        }
        if self.default_separator:
            out["defaultSeparator"] = self.default_separator
        if self.default_padding:
            out["defaultPadding"] = self.default_padding
        out["inheritSeparatorColors"] = self.inherit_separator_colors
        if self.override_background_color:
            out["overrideBackgroundColor"] = self.override_background_color
        if self.override_foreground_color:
            out["overrideForegroundColor"] = self.override_foreground_color
        out["globalBold"] = self.global_bold
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Build settings from their JSON form; raises ValueError on wrong types."""
        if not isinstance(data, dict):
            raise ValueError("settings: expected a JSON object")
        raw_lines = data.get("lines")
        if raw_lines is None:
            raw_lines = []
        if not isinstance(raw_lines, list):
            raise ValueError("lines: expected an array")
        lines: list[list[WidgetItem]] = []
        for raw_line in raw_lines:
            if raw_line is None:
                lines.append([])
                continue
            if not isinstance(raw_line, list):
                raise ValueError("lines: expected an array of arrays")
            lines.append([WidgetItem.from_dict(item) for item in raw_line])
        return cls(
            version=_expect_int(data, "version"),
            lines=lines,
            flex_mode=_expect_str(data, "flexMode"),
            compact_threshold=_expect_int(data, "compactThreshold"),
            color_level=_expect_int(data, "colorLevel"),
            default_separator=_expect_str(data, "defaultSeparator"),
            default_padding=_expect_str(data, "defaultPadding"),
            inherit_separator_colors=_expect_bool(data, "inheritSeparatorColors"),
            override_background_color=_expect_str(data, "overrideBackgroundColor"),
            override_foreground_color=_expect_str(data, "overrideForegroundColor"),
            global_bold=_expect_bool(data, "globalBold"),
        )


def default_settings() -> Settings:
    """The configuration used when no settings file exists."""
    line1 = [
        WidgetItem(id="1", type="model", color="cyan"),
        WidgetItem(id="2", type="separator"),
        WidgetItem(id="3", type="context-percentage", color="brightBlack"),
        WidgetItem(id="4", type="separator"),
        WidgetItem(id="5", type="tokens-input", color="white"),
        WidgetItem(id="6", type="separator"),
        WidgetItem(id="7", type="tokens-output", color="white"),
        WidgetItem(id="8", type="separator"),
        WidgetItem(id="9", type="cache-hit-rate", color="cyan"),
        WidgetItem(id="10", type="separator"),
        WidgetItem(id="11", type="git-branch", color="magenta"),
        WidgetItem(id="12", type="separator"),
        WidgetItem(id="13", type="lines-added", color="green"),
        WidgetItem(id="14", type="lines-removed", color="red"),
        WidgetItem(id="15", type="separator"),
        WidgetItem(id="16", type="session-cost", color="green"),
    ]
    line2 = [
        WidgetItem(id="17", type="current-working-dir", color="blue", raw_value=True),
        WidgetItem(id="18", type="separator"),
        WidgetItem(id="19", type="session-clock", color="white"),
    ]
    return Settings(
        version=CURRENT_VERSION,
        color_level=2,
        flex_mode="full-until-compact",
        compact_threshold=60,
        default_separator="|",
        default_padding=" ",
        lines=[line1, line2],
    )


def config_dir() -> str:
    """Directory holding the settings file ($XDG_CONFIG_HOME or ~/.config)."""
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        return os.path.join(xdg, CONFIG_DIR_NAME)
    try:
        home = str(Path.home())
    except RuntimeError:
        return ""
    return os.path.join(home, ".config", CONFIG_DIR_NAME)


def config_path() -> str:
    """Full path of settings.json."""
    return os.path.join(config_dir(), CONFIG_FILE_NAME)


def load() -> Settings:
    """Read the settings file, or return the defaults when it does not exist."""
    try:
        with open(config_path(), "rb") as handle:
            raw = handle.read()
    except FileNotFoundError:
        return default_settings()
    data = json.loads(raw)
    if data is None:
        return Settings()
    return Settings.from_dict(data)


def _write_private(path: str, text: str) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(text)


def save(settings: Settings) -> None:
    """Write the settings file, creating its directory if needed."""
    os.makedirs(config_dir(), mode=0o755, exist_ok=True)
    text = json.dumps(settings.to_dict(), indent=2, ensure_ascii=False) + "\n"
    _write_private(config_path(), text)
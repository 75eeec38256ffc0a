"""Widgets showing directories and file paths."""

from __future__ import annotations

from ccstatus.config import Settings, WidgetItem
from ccstatus.widgets.base import DEFAULT_DIM_COLOR, RenderContext, Widget, shorten_home


def _base(path: str) -> str:
    """Last element of a slash-separated path, ignoring trailing slashes."""
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def _show(path: str, raw: bool) -> str:
    return shorten_home(path) if raw else _base(path)


class CurrentDirWidget(Widget):
    """The current working directory: its base name, or the full path in raw mode."""

    display_name = "Current Directory"
    description = "Current working directory"
    default_color = "blue"
    supports_raw_value = True

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        data = ctx.data
        if data is None:
            return ""
        directory = ""
        if data.workspace is not None and data.workspace.current_dir:
            directory = data.workspace.current_dir
        elif data.cwd:
            directory = data.cwd
        if not directory:
            return ""
        return _show(directory, item.raw_value)


class ProjectDirWidget(Widget):
    """The project root directory."""

    display_name = "Project Directory"
    description = "Project root directory"
    default_color = "blue"
    supports_raw_value = True

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        data = ctx.data
        if data is None or data.workspace is None or not data.workspace.project_dir:
            return ""
        return _show(data.workspace.project_dir, item.raw_value)


class TranscriptPathWidget(Widget):
    """The transcript file path."""

    display_name = "Transcript Path"
    description = "Transcript file path"
    default_color = DEFAULT_DIM_COLOR
    supports_raw_value = True

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        data = ctx.data
        if data is None or not data.transcript_path:
            return ""
        return _show(data.transcript_path, item.raw_value)
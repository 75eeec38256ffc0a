"""User-defined text and command widgets, and layout separators."""

from __future__ import annotations

import json
import subprocess

from ccstatus.color import strip_ansi
from ccstatus.config import Settings, WidgetItem
from ccstatus.widgets.base import DEFAULT_DIM_COLOR, RenderContext, Widget

DEFAULT_COMMAND_TIMEOUT = 3.0
FLEX_SEPARATOR_TYPE = "flex-separator"


class CustomTextWidget(Widget):
    """User-defined static text."""

    display_name = "Custom Text"
    description = "User-defined static text"
    default_color = "white"

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        return item.custom_text


class CustomCommandWidget(Widget):
    """First line of a shell command's output; the session JSON is its stdin."""

    display_name = "Custom Command"
    description = "Output from a shell command"
    default_color = "white"

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        if not item.command_path:
            return ""
        timeout = item.timeout / 1000 if item.timeout > 0 else DEFAULT_COMMAND_TIMEOUT
        stdin_data = b""
        if ctx.data is not None:
            stdin_data = json.dumps(ctx.data.to_dict()).encode("utf-8")
        try:
            result = subprocess.run(
                ["sh", "-c", item.command_path],
                input=stdin_data,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                timeout=timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired):
            return ""
        if result.returncode != 0:
            return ""

        output = result.stdout.strip()
        output = output.split(b"\n", 1)[0]
        if item.max_width > 0 and len(output) > item.max_width:
            output = output[: item.max_width]
        text = output.decode("utf-8", errors="ignore")
        if not item.preserve_colors:
            text = strip_ansi(text)
        return text


class SeparatorWidget(Widget):
    """A visual separator between widgets."""

    display_name = "Separator"
    description = "Visual separator between widgets"
    default_color = DEFAULT_DIM_COLOR

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        if item.character:
            return item.character
        if settings is not None and settings.default_separator:
            return settings.default_separator
        return "|"


class FlexSeparatorWidget(Widget):
    """Placeholder that the render pipeline expands to fill the line."""

    display_name = "Flex Separator"
    description = "Expands to fill remaining terminal width"
    default_color = ""

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        return FLEX_SEPARATOR_TYPE
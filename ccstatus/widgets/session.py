"""Widgets showing session facts: model, version, ids and simple fields."""

from __future__ import annotations

from typing import Callable

from ccstatus.config import Settings, WidgetItem
from ccstatus.status import Session
from ccstatus.widgets.base import DEFAULT_DIM_COLOR, RenderContext, Widget

SESSION_ID_SHORT_LEN = 8


class ModelWidget(Widget):
    """The current model's display name, or its identifier in raw mode."""

    display_name = "Model"
    description = "Current Claude model name"
    default_color = "cyan"
    supports_raw_value = True

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        if ctx.data is None:
            return ""
        model = ctx.data.model
        if item.raw_value:
            return model.id
        return model.display_name or model.id


class VersionWidget(Widget):
    """The Claude Code version."""

    display_name = "Version"
    description = "Claude Code version"
    default_color = DEFAULT_DIM_COLOR

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        if ctx.data is None:
            return ""
        return ctx.data.version


class SessionIdWidget(Widget):
    """The session identifier, shortened unless raw mode is set."""

    display_name = "Session ID"
    description = "Claude Code session identifier"
    default_color = DEFAULT_DIM_COLOR
    supports_raw_value = True

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        if ctx.data is None or not ctx.data.session_id:
            return ""
        if item.raw_value:
            return ctx.data.session_id
        return ctx.data.session_id[:SESSION_ID_SHORT_LEN]


class StringFieldWidget(Widget):
    """Shows one string taken from the session."""

    def __init__(
        self,
        extract: Callable[[Session], str],
        default_color: str,
        display_name: str,
        description: str,
        default_prefix: str = "",
        default_suffix: str = "",
    ) -> None:
        self.extract = extract
        self.default_color = default_color
        self.display_name = display_name
        self.description = description
        self.default_prefix = default_prefix
        self.default_suffix = default_suffix

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        if ctx.data is None:
            return ""
        return self.extract(ctx.data)


class Exceeds200kWidget(Widget):
    """A warning once the token count passes 200k."""

    display_name = "Exceeds 200k"
    description = "Warning when tokens exceed 200k threshold"
    default_color = "red"

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        if ctx.data is None or not ctx.data.exceeds_200k:
            return ""
        return ">200k"


class TerminalWidthWidget(Widget):
    """The terminal width in columns."""

    display_name = "Terminal Width"
    description = "Terminal width in columns"
    default_color = DEFAULT_DIM_COLOR

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        if ctx.terminal_width <= 0:
            return ""
        return str(ctx.terminal_width)
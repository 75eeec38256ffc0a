"""Token count and context window widgets."""

from __future__ import annotations

from typing import Callable

from ccstatus import status
from ccstatus.config import Settings, WidgetItem
from ccstatus.status import Session
from ccstatus.widgets.base import DEFAULT_DIM_COLOR, RenderContext, Widget

TokenExtractor = Callable[[Session], "int | None"]
PercentageExtractor = Callable[[Session], "float | None"]


def _format_percentage(pct: float, raw: bool) -> str:
    return f"{pct:.1f}" if raw else f"{pct:.0f}%"


class TokenWidget(Widget):
    """Shows a formatted token count; hidden when absent or zero."""

    default_color = DEFAULT_DIM_COLOR

    def __init__(
        self,
        extract: TokenExtractor,
        display_name: str,
        description: str,
        default_prefix: str = "",
        default_suffix: str = "",
    ) -> None:
        self.extract = extract
        self.display_name = display_name
        self.description = description
        self.default_prefix = default_prefix
        self.default_suffix = default_suffix

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        if ctx.data is None:
            return ""
        count = self.extract(ctx.data)
        if not count:
            return ""
        return status.format_tokens(count)


class PercentageWidget(Widget):
    """Shows a percentage; a present zero is still shown as "0%"."""

    supports_raw_value = True

    def __init__(
        self,
        extract: PercentageExtractor,
        display_name: str,
        description: str,
        default_prefix: str = "",
        default_suffix: str = "",
        default_color: str = "",
    ) -> None:
        self.extract = extract
        self.display_name = display_name
        self.description = description
        self.default_prefix = default_prefix
        self.default_suffix = default_suffix
        self.default_color = default_color or DEFAULT_DIM_COLOR

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        if ctx.data is None:
            return ""
        pct = self.extract(ctx.data)
        if pct is None:
            return ""
        return _format_percentage(pct, item.raw_value)


class ContextLengthWidget(Widget):
    """Context window usage as a token count."""

    display_name = "Context Length"
    description = "Context window usage in tokens"
    default_color = DEFAULT_DIM_COLOR
    default_prefix = "CtxLen: "

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        if ctx.data is None:
            return ""
        length = status.context_length(ctx.data)
        if length == 0:
            return ""
        return status.format_tokens(length)


class ContextPercentageUsableWidget(Widget):
    """Context usage as a percentage of the usable window (80% of max)."""

    display_name = "Context % Usable"
    description = "Context usage as percentage of usable window (80% of max)"
    default_color = DEFAULT_DIM_COLOR
    supports_raw_value = True
    default_prefix = "Usable: "

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        if ctx.data is None:
            return ""
        length = status.context_length(ctx.data)
        if length == 0:
            return ""
        limits = status.context_config(ctx.data)
        if limits.usable_tokens == 0:
            return ""
        pct = min(length / limits.usable_tokens * 100, 100.0)
        return _format_percentage(pct, item.raw_value)


def extract_input_tokens(data: Session) -> int | None:
    """Total input tokens of the session."""
    cw = data.context_window
    return None if cw is None else cw.total_input_tokens


def extract_output_tokens(data: Session) -> int | None:
    """Total output tokens of the session."""
    cw = data.context_window
    return None if cw is None else cw.total_output_tokens


def _current_usage(data: Session) -> status.CurrentUsage | None:
    cw = data.context_window
    return None if cw is None else cw.current_usage


def extract_cached_tokens(data: Session) -> int | None:
    """Cache-read tokens of the latest call."""
    usage = _current_usage(data)
    return None if usage is None else usage.cache_read_input_tokens


def extract_current_input_tokens(data: Session) -> int | None:
    """Input tokens of the latest call."""
    usage = _current_usage(data)
    return None if usage is None else usage.input_tokens


def extract_current_output_tokens(data: Session) -> int | None:
    """Output tokens of the latest call."""
    usage = _current_usage(data)
    return None if usage is None else usage.output_tokens


def extract_cache_creation_tokens(data: Session) -> int | None:
    """Cache-creation tokens of the latest call."""
    usage = _current_usage(data)
    return None if usage is None else usage.cache_creation_input_tokens


def extract_total_tokens(data: Session) -> int | None:
    """Total input plus output tokens; missing parts count as zero."""
    cw = data.context_window
    if cw is None:
        return None
    return (cw.total_input_tokens or 0) + (cw.total_output_tokens or 0)
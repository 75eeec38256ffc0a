"""Rendering a line of widgets into a coloured, width-limited string."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ccstatus import color
from ccstatus.config import Settings, WidgetItem
from ccstatus.truncate import truncate
from ccstatus.widgets import registry
from ccstatus.widgets.base import RenderContext

SEPARATOR_TYPE = "separator"
FLEX_SEPARATOR_TYPE = "flex-separator"

# Columns given up in "full" and "full-until-compact" modes.
FLEX_FULL_PADDING = 10
# Columns given up in "full-minus-40" mode and once compaction nears.
FLEX_COMPACT_PADDING = 40


@dataclass
class Segment:
    """A rendered widget together with the item it came from."""

    text: str
    item: WidgetItem
    is_sep: bool = False


def calculate_flex_width(
    detected: int, flex_mode: str, compact_threshold: int, context_pct: float
) -> int:
    """The usable width for the given flex mode."""
    if flex_mode == "full":
        return detected - FLEX_FULL_PADDING
    if flex_mode == "full-minus-40":
        return detected - FLEX_COMPACT_PADDING
    if flex_mode == "full-until-compact":
        if context_pct >= compact_threshold:
            return detected - FLEX_COMPACT_PADDING
        return detected - FLEX_FULL_PADDING
    return detected


def _render_widgets(
    items: list[WidgetItem], ctx: RenderContext, settings: Settings
) -> list[Segment]:
    segments = []
    for item in items:
        widget = registry.get(item.type)
        if widget is None:
            continue
        text = widget.render(item, ctx, settings)
        if text:
            prefix = item.prefix or widget.default_prefix
            suffix = item.suffix or widget.default_suffix
            text = prefix + text + suffix
        segments.append(Segment(text=text, item=item, is_sep=item.type == SEPARATOR_TYPE))
    return segments


def clean_separators(segments: list[Segment]) -> list[Segment]:
    """Drop empty widgets and leading, trailing and repeated separators.

    Flex separators are kept and do not count as separators.
    """
    filtered = [
        seg
        for seg in segments
        if seg.text or seg.is_sep or seg.item.type == FLEX_SEPARATOR_TYPE
    ]
    start = 0
    while start < len(filtered) and filtered[start].is_sep:
        start += 1
    end = len(filtered)
    while end > start and filtered[end - 1].is_sep:
        end -= 1
    filtered = filtered[start:end]

    result: list[Segment] = []
    previous_sep = False
    for seg in filtered:
        if not (seg.is_sep and previous_sep):
            result.append(seg)
        previous_sep = seg.is_sep
    return result


def _widget_color(item: WidgetItem) -> str:
    if item.color:
        return item.color
    widget = registry.get(item.type)
    return widget.default_color if widget is not None else ""


def _inherit_color(segments: list[Segment], sep_index: int) -> str:
    for seg in reversed(segments[:sep_index]):
        if not seg.is_sep:
            return _widget_color(seg.item)
    return ""


def _resolve_color(segments: list[Segment], index: int, settings: Settings) -> str:
    seg = segments[index]
    if seg.item.color:
        return seg.item.color
    if seg.is_sep and settings.inherit_separator_colors:
        return _inherit_color(segments, index)
    return _widget_color(seg.item)


def _apply_colors(segments: list[Segment], settings: Settings) -> list[str]:
    result = []
    for index, seg in enumerate(segments):
        if seg.item.type == FLEX_SEPARATOR_TYPE:
            result.append("")
            continue
        fg = settings.override_foreground_color or _resolve_color(segments, index, settings)
        bg = settings.override_background_color or seg.item.background_color
        bold = seg.item.bold or settings.global_bold
        result.append(color.apply(seg.text, fg, bg, bold, settings.color_level))
    return result


def _join_with_flex(
    colored: list[str], segments: list[Segment], settings: Settings, ctx: RenderContext
) -> str:
    padding = settings.default_padding
    flex_index = next(
        (i for i, seg in enumerate(segments) if seg.item.type == FLEX_SEPARATOR_TYPE), None
    )
    if flex_index is None:
        return padding.join(colored)

    left = padding.join(colored[:flex_index])
    right = padding.join(colored[flex_index + 1:])
    if ctx.terminal_width <= 0:
        return left + " " + right
    fill = ctx.terminal_width - color.visible_width(left) - color.visible_width(right)
    return left + " " * max(fill, 0) + right


def render_line(items: list[WidgetItem], settings: Settings, ctx: RenderContext) -> str:
    """Render one line of widgets into an ANSI-coloured string."""
    if ctx.terminal_width > 0 and settings is not None:
        pct = 0.0
        data = ctx.data
        if (
            data is not None
            and data.context_window is not None
            and data.context_window.used_percentage is not None
        ):
            pct = data.context_window.used_percentage
        ctx = replace(
            ctx,
            terminal_width=calculate_flex_width(
                ctx.terminal_width, settings.flex_mode, settings.compact_threshold, pct
            ),
        )

    segments = clean_separators(_render_widgets(items, ctx, settings))
    if not segments:
        return ""
    colored = _apply_colors(segments, settings)
    line = _join_with_flex(colored, segments, settings, ctx)
    if ctx.terminal_width > 0:
        line = truncate(line, ctx.terminal_width)
    return line


def post_process(line: str) -> str:
    """Prepare a rendered line for display.

    Lines with no visible content become empty; spaces become non-breaking
    spaces and a reset code is put in front to cancel inherited dimming.
    """
    if not color.strip_ansi(line).strip():
        return ""
    return "\x1b[0m" + line.replace(" ", "\u00a0")
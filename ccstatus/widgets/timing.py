"""Widgets showing durations, cost and the five-hour block timer."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from ccstatus.config import Settings, WidgetItem
from ccstatus.transcript import session_start
from ccstatus.widgets.base import (
    DEFAULT_DIM_COLOR,
    DEFAULT_GREEN_COLOR,
    RenderContext,
    Widget,
)

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE

COST_PRECISION_THRESHOLD = 0.01

BLOCK_DURATION = timedelta(hours=5)
BAR_WIDTH = 10


def format_duration(ms: float) -> str:
    """Format milliseconds as "<1m", "5m", "1h" or "1h31m"."""
    total = int(ms)
    hours, rest = divmod(abs(total), MS_PER_HOUR)
    mins = rest // MS_PER_MINUTE
    if total < 0:
        hours, mins = -hours, -mins
    if hours == 0 and mins == 0:
        return "<1m"
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h{mins}m"


def format_cost(cost: float) -> str:
    """Two decimals, or four for amounts under one cent."""
    if cost < COST_PRECISION_THRESHOLD:
        return f"{cost:.4f}"
    return f"{cost:.2f}"


def format_block_time(elapsed: timedelta) -> str:
    """Format elapsed time within the block, e.g. "2h15m/5h"."""
    seconds = elapsed.total_seconds()
    hours = int(seconds / 3600)
    total_minutes = int(seconds / 60)
    mins = abs(total_minutes) % 60 * (1 if total_minutes >= 0 else -1)
    if hours == 0 and mins == 0:
        return "<1m/5h"
    if hours == 0:
        return f"{mins}m/5h"
    if mins == 0:
        return f"{hours}h/5h"
    return f"{hours}h{mins}m/5h"


def format_progress_bar(pct: float) -> str:
    """A ten-cell bar followed by the percentage, e.g. "[=====>    ] 50%"."""
    filled = min(int(pct * BAR_WIDTH / 100), BAR_WIDTH)
    empty = BAR_WIDTH - filled
    bar = "=" * filled
    if empty > 0:
        bar += ">" + " " * (empty - 1)
    return f"[{bar}] {pct:.0f}%"


class ApiDurationWidget(Widget):
    """Total time spent waiting on the API."""

    display_name = "API Duration"
    description = "Total API response time"
    default_color = DEFAULT_DIM_COLOR
    supports_raw_value = True
    default_prefix = "API: "

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        data = ctx.data
        if data is None or data.cost is None or data.cost.total_api_duration_ms is None:
            return ""
        ms = data.cost.total_api_duration_ms
        if item.raw_value:
            return f"{ms:.0f}"
        return format_duration(ms)


class SessionClockWidget(Widget):
    """How long the session has been running."""

    display_name = "Session Clock"
    description = "Session duration"
    default_color = DEFAULT_DIM_COLOR
    supports_raw_value = True
    default_prefix = "Session: "

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        data = ctx.data
        if data is None or data.cost is None or data.cost.total_duration_ms is None:
            return ""
        ms = data.cost.total_duration_ms
        if item.raw_value:
            return f"{ms:.0f}"
        return format_duration(ms)


class SessionCostWidget(Widget):
    """The session cost in US dollars."""

    display_name = "Session Cost"
    description = "Session cost in USD"
    default_color = DEFAULT_GREEN_COLOR
    supports_raw_value = True
    default_prefix = "Cost: "

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        data = ctx.data
        if data is None or data.cost is None or data.cost.total_cost_usd is None:
            return ""
        cost = data.cost.total_cost_usd
        if item.raw_value:
            return f"{cost:.4f}"
        return "$" + format_cost(cost)


class BlockTimerWidget(Widget):
    """Elapsed time within a five-hour block.

    metadata["display"] chooses "time" (default), "progress" or "percentage".
    """

    display_name = "Block Timer"
    description = "5-hour session block timer"
    default_color = DEFAULT_DIM_COLOR
    default_prefix = "Block: "

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        elapsed = self._elapsed(ctx)
        if elapsed <= timedelta(0):
            return ""
        elapsed = min(elapsed, BLOCK_DURATION)
        mode = (item.metadata or {}).get("display", "time")
        pct = elapsed / BLOCK_DURATION * 100
        if mode == "progress":
            return format_progress_bar(pct)
        if mode == "percentage":
            return f"{pct:.0f}%"
        return format_block_time(elapsed)

    @staticmethod
    def _elapsed(ctx: RenderContext) -> timedelta:
        data = ctx.data
        if data is None:
            return timedelta(0)
        if data.cost is not None and data.cost.total_duration_ms is not None:
            ms = data.cost.total_duration_ms
            if ms > 0:
                return timedelta(milliseconds=int(ms))
        if data.transcript_path:
            start = session_start(data.transcript_path)
            if start is not None:
                return datetime.now(timezone.utc) - start
        return timedelta(0)
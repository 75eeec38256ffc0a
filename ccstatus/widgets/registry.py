"""Registry of widget types by name."""

from __future__ import annotations

from ccstatus import status
from ccstatus.status import Session
from ccstatus.widgets.base import DEFAULT_DIM_COLOR, Widget
from ccstatus.widgets.gitinfo import (
    GitBranchWidget,
    GitChangesWidget,
    GitWorktreeWidget,
    LinesAddedWidget,
    LinesChangedWidget,
    LinesRemovedWidget,
)
from ccstatus.widgets.layout import (
    CustomCommandWidget,
    CustomTextWidget,
    FlexSeparatorWidget,
    SeparatorWidget,
)
from ccstatus.widgets.metrics import (
    ContextLengthWidget,
    ContextPercentageUsableWidget,
    PercentageWidget,
    TokenWidget,
    extract_cache_creation_tokens,
    extract_cached_tokens,
    extract_current_input_tokens,
    extract_current_output_tokens,
    extract_input_tokens,
    extract_output_tokens,
    extract_total_tokens,
)
from ccstatus.widgets.paths import CurrentDirWidget, ProjectDirWidget, TranscriptPathWidget
from ccstatus.widgets.session import (
    Exceeds200kWidget,
    ModelWidget,
    SessionIdWidget,
    StringFieldWidget,
    TerminalWidthWidget,
    VersionWidget,
)
from ccstatus.widgets.timing import (
    ApiDurationWidget,
    BlockTimerWidget,
    SessionClockWidget,
    SessionCostWidget,
)


def _output_style(data: Session) -> str:
    return "" if data.output_style is None else data.output_style.name


def _vim_mode(data: Session) -> str:
    return "" if data.vim is None else data.vim.mode


def _agent_name(data: Session) -> str:
    return "" if data.agent is None else data.agent.name


_REGISTRY: dict[str, Widget] = {
    # Model and session
    "model": ModelWidget(),
    "version": VersionWidget(),
    "session-cost": SessionCostWidget(),
    "session-clock": SessionClockWidget(),
    # Git
    "git-branch": GitBranchWidget(),
    "git-changes": GitChangesWidget(),
    "git-worktree": GitWorktreeWidget(),
    # Token metrics
    "tokens-input": TokenWidget(
        extract_input_tokens, "Input Tokens", "Total input token count", default_prefix="In: "
    ),
    "tokens-output": TokenWidget(
        extract_output_tokens, "Output Tokens", "Total output token count", default_prefix="Out: "
    ),
    "tokens-cached": TokenWidget(
        extract_cached_tokens, "Cached Tokens", "Cached token count", default_prefix="Cached: "
    ),
    "tokens-total": TokenWidget(
        extract_total_tokens,
        "Total Tokens",
        "Total token count (input + output)",
        default_prefix="Total: ",
    ),
    "current-usage-input": TokenWidget(
        extract_current_input_tokens,
        "Current Input Tokens",
        "Current round input token count",
        default_prefix="CurIn: ",
    ),
    "current-usage-output": TokenWidget(
        extract_current_output_tokens,
        "Current Output Tokens",
        "Current round output token count",
        default_prefix="CurOut: ",
    ),
    "cache-creation": TokenWidget(
        extract_cache_creation_tokens,
        "Cache Creation Tokens",
        "Cache creation input token count",
        default_prefix="CacheW: ",
    ),
    # Context window
    "context-length": ContextLengthWidget(),
    "context-percentage": PercentageWidget(
        status.context_percentage,
        "Context %",
        "Context usage as percentage of max window",
        default_prefix="Ctx: ",
    ),
    "context-percentage-usable": ContextPercentageUsableWidget(),
    "remaining-percentage": PercentageWidget(
        status.remaining_percentage,
        "Remaining %",
        "Remaining context window percentage",
        default_prefix="Rem: ",
    ),
    "cache-hit-rate": PercentageWidget(
        status.cache_hit_rate,
        "Cache Hit Rate",
        "Cache read token ratio as percentage",
        default_prefix="Cache: ",
        default_color="cyan",
    ),
    # Environment
    "current-working-dir": CurrentDirWidget(),
    "project-dir": ProjectDirWidget(),
    "transcript-path": TranscriptPathWidget(),
    "lines-changed": LinesChangedWidget(),
    "lines-added": LinesAddedWidget(),
    "lines-removed": LinesRemovedWidget(),
    # Cost and duration
    "api-duration": ApiDurationWidget(),
    "block-timer": BlockTimerWidget(),
    # Session info
    "session-id": SessionIdWidget(),
    "output-style": StringFieldWidget(
        _output_style,
        DEFAULT_DIM_COLOR,
        "Output Style",
        "Current output style name",
        default_prefix="Style: ",
    ),
    "vim-mode": StringFieldWidget(
        _vim_mode, "yellow", "Vim Mode", "Current vim mode indicator", default_prefix="Vim: "
    ),
    "agent-name": StringFieldWidget(
        _agent_name,
        "cyan",
        "Agent Name",
        "Agent name when using --agent flag",
        default_prefix="Agent: ",
    ),
    "exceeds-200k": Exceeds200kWidget(),
    "terminal-width": TerminalWidthWidget(),
    # User-defined
    "custom-text": CustomTextWidget(),
    "custom-command": CustomCommandWidget(),
    # Layout
    "separator": SeparatorWidget(),
    "flex-separator": FlexSeparatorWidget(),
}


def get(widget_type: str) -> Widget | None:
    """The widget registered under a type name, or None if unknown."""
    return _REGISTRY.get(widget_type)


def register(widget_type: str, widget: Widget) -> None:
    """Add or replace a widget under a type name."""
    _REGISTRY[widget_type] = widget


def types() -> list[str]:
    """All registered widget type names."""
    return list(_REGISTRY)
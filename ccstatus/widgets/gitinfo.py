"""Widgets showing git repository state."""

from __future__ import annotations

from ccstatus.config import Settings, WidgetItem
from ccstatus.widgets.base import DEFAULT_GREEN_COLOR, RenderContext, Widget


class GitBranchWidget(Widget):
    """The current branch, optionally preceded by a marker character."""

    display_name = "Git Branch"
    description = "Current git branch name"
    default_color = "magenta"
    supports_raw_value = True

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        name = ctx.git.branch()
        if not name:
            return ""
        if item.raw_value:
            return name
        if item.character:
            return f"{item.character} {name}"
        return name


class GitChangesWidget(Widget):
    """The number of uncommitted changes; hidden when there are none."""

    display_name = "Git Changes"
    description = "Uncommitted changes count"
    default_color = "yellow"

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        count = ctx.git.changes()
        if count == 0:
            return ""
        return str(count)


class GitWorktreeWidget(Widget):
    """The linked worktree name, taken from the session first, then from git."""

    display_name = "Git Worktree"
    description = "Current git worktree name"
    default_color = "magenta"

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        data = ctx.data
        if data is not None and data.worktree is not None and data.worktree.name:
            return data.worktree.name
        return ctx.git.worktree()


class LinesChangedWidget(Widget):
    """Uncommitted lines added and removed, as "+N/-M"."""

    display_name = "Lines Changed"
    description = "Uncommitted lines added and removed (git diff)"
    default_color = DEFAULT_GREEN_COLOR

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        stat = ctx.git.diff()
        if stat.added == 0 and stat.removed == 0:
            return ""
        return f"+{stat.added}/-{stat.removed}"


class LinesAddedWidget(Widget):
    """Uncommitted lines added, as "+N"."""

    display_name = "Lines Added"
    description = "Uncommitted lines added (git diff)"
    default_color = DEFAULT_GREEN_COLOR

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        stat = ctx.git.diff()
        if stat.added == 0:
            return ""
        return f"+{stat.added}"


class LinesRemovedWidget(Widget):
    """Uncommitted lines removed, as "-N"."""

    display_name = "Lines Removed"
    description = "Uncommitted lines removed (git diff)"
    default_color = "red"

    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        stat = ctx.git.diff()
        if stat.removed == 0:
            return ""
        return f"-{stat.removed}"
"""Widget contract, per-render context and a lazy cache of git lookups."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable

from ccstatus import git
from ccstatus.config import Settings, WidgetItem
from ccstatus.status import Session

# Foreground colour of secondary widgets.
DEFAULT_DIM_COLOR = "white"
# Foreground colour of positive and cost widgets.
DEFAULT_GREEN_COLOR = "green"


class GitCache:
    """Caches git lookups for one render cycle; each runs at most once."""

    def __init__(self) -> None:
        self._results: dict[str, Any] = {}

    def _cached(self, key: str, fetch: Callable[[], Any]) -> Any:
        if key not in self._results:
            self._results[key] = fetch()
        return self._results[key]

    def branch(self) -> str:
        """Current branch name."""
        return self._cached("branch", git.branch)

    def changes(self) -> int:
        """Number of uncommitted changes."""
        return self._cached("changes", git.changes)

    def worktree(self) -> str:
        """Name of the linked worktree, if any."""
        return self._cached("worktree", git.worktree)

    def diff(self) -> git.DiffStat:
        """Lines added and removed in the working tree."""
        return self._cached("diff", git.diff)


@dataclass
class RenderContext:
    """Runtime data available to every widget while rendering."""

    data: Session | None = None
    terminal_width: int = 0
    git: GitCache = field(default_factory=GitCache)


class Widget(ABC):
    """A status line widget.

    A widget with nothing to show renders as an empty string.  The prefix and
    suffix defaults apply only where the configured item leaves them empty.
    """

    display_name: str = ""
    description: str = ""
    default_color: str = ""
    supports_raw_value: bool = False
    default_prefix: str = ""
    default_suffix: str = ""

    @abstractmethod
    def render(self, item: WidgetItem, ctx: RenderContext, settings: Settings | None) -> str:
        """Produce the widget text for the status line."""


def _home_dir() -> str:
    home = os.path.expanduser("~")
    if not home or home == "~":
        return ""
    return home


def shorten_home(path: str) -> str:
    """Replace a leading home directory with "~"."""
    home = _home_dir()
    if not home:
        return path
    if path == home:
        return "~"
    if path.startswith(home + "/"):
        return "~" + path[len(home):]
    return path
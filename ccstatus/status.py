"""Session payload received on stdin and the metrics derived from it."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

DEFAULT_MAX_TOKENS = 200_000
DEFAULT_USABLE_RATIO = 80  # percent of the maximum window
LONG_MAX_TOKENS = 1_000_000


def _as_object(value: Any, name: str) -> dict | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError(f"{name}: expected a JSON object")
    return value


def _as_str(value: Any, name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{name}: expected a string")
    return value


def _as_int(value: Any, name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name}: expected an integer")
    return value


def _as_float(value: Any, name: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name}: expected a number")
    return float(value)


def _as_bool(value: Any, name: str) -> bool | None:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValueError(f"{name}: expected a boolean")
    return value


def _compact(pairs: dict[str, Any]) -> dict[str, Any]:
    """Drop absent values and empty strings, as optional JSON fields are omitted."""
    return {key: value for key, value in pairs.items() if value is not None and value != ""}


def infer_display_name(model_id: str) -> str:
    """Guess a short display name from a model identifier."""
    lower = model_id.lower()
    for family, name in (("opus", "Opus"), ("sonnet", "Sonnet"), ("haiku", "Haiku")):
        if family in lower:
            return name
    return model_id


@dataclass
class ModelField:
    """The model, sent either as a plain identifier or as an object."""

    id: str = ""
    display_name: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "display_name": self.display_name}


@dataclass
class Workspace:
    current_dir: str = ""
    project_dir: str = ""


@dataclass
class OutputStyle:
    name: str = ""


@dataclass
class CostInfo:
    total_cost_usd: float | None = None
    total_duration_ms: float | None = None
    total_api_duration_ms: float | None = None
    total_lines_added: int | None = None
    total_lines_removed: int | None = None


@dataclass
class CurrentUsage:
    """Token counts from the most recent API call."""

    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0


@dataclass
class ContextWindow:
    total_input_tokens: int | None = None
    total_output_tokens: int | None = None
    context_window_size: int | None = None
    used_percentage: float | None = None
    remaining_percentage: float | None = None
    current_usage: CurrentUsage | None = None


@dataclass
class VimInfo:
    mode: str = ""


@dataclass
class AgentInfo:
    name: str = ""


@dataclass
class WorktreeInfo:
    name: str = ""
    path: str = ""
    branch: str = ""
    original_cwd: str = ""
    original_branch: str = ""


@dataclass
class Session:
    """The JSON payload piped in by Claude Code; every field is optional."""

    cwd: str = ""
    session_id: str = ""
    transcript_path: str = ""
    model: ModelField = field(default_factory=ModelField)
    workspace: Workspace | None = None
    version: str = ""
    output_style: OutputStyle | None = None
    cost: CostInfo | None = None
    context_window: ContextWindow | None = None
    exceeds_200k: bool | None = None
    vim: VimInfo | None = None
    agent: AgentInfo | None = None
    worktree: WorktreeInfo | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialise back to the wire form, omitting absent fields."""
        out: dict[str, Any] = _compact(
            {
                "cwd": self.cwd,
                "session_id": self.session_id,
                "transcript_path": self.transcript_path,
            }
        )
        out["model"] = self.model.to_dict()
        if self.workspace is not None:
            out["workspace"] = _compact(
                {
                    "current_dir": self.workspace.current_dir,
                    "project_dir": self.workspace.project_dir,
                }
            )
        if self.version:
            out["version"] = self.version
        if self.output_style is not None:
            out["output_style"] = _compact({"name": self.output_style.name})
        if self.cost is not None:
            out["cost"] = _compact(
                {
                    "total_cost_usd": self.cost.total_cost_usd,
                    "total_duration_ms": self.cost.total_duration_ms,
                    "total_api_duration_ms": self.cost.total_api_duration_ms,
                    "total_lines_added": self.cost.total_lines_added,
                    "total_lines_removed": self.cost.total_lines_removed,
                }
            )
        if self.context_window is not None:
            cw = self.context_window
            window = _compact(
                {
                    "total_input_tokens": cw.total_input_tokens,
                    "total_output_tokens": cw.total_output_tokens,
                    "context_window_size": cw.context_window_size,
                    "used_percentage": cw.used_percentage,
                    "remaining_percentage": cw.remaining_percentage,
                }
            )
            if cw.current_usage is not None:
                cu = cw.current_usage
                window["current_usage"] = {
                    "input_tokens": cu.input_tokens,
                    "output_tokens": cu.output_tokens,
                    "cache_creation_input_tokens": cu.cache_creation_input_tokens,
                    "cache_read_input_tokens": cu.cache_read_input_tokens,
                }
            out["context_window"] = window
        if self.exceeds_200k is not None:
            out["exceeds_200k_tokens"] = self.exceeds_200k
        if self.vim is not None:
            out["vim"] = _compact({"mode": self.vim.mode})
        if self.agent is not None:
            out["agent"] = _compact({"name": self.agent.name})
        if self.worktree is not None:
            wt = self.worktree
            out["worktree"] = _compact(
                {
                    "name": wt.name,
                    "path": wt.path,
                    "branch": wt.branch,
                    "original_cwd": wt.original_cwd,
                    "original_branch": wt.original_branch,
                }
            )
        return out


def _parse_model(value: Any) -> ModelField:
    if value is None:
        return ModelField()
    if isinstance(value, str):
        return ModelField(id=value, display_name=infer_display_name(value))
    obj = _as_object(value, "model")
    return ModelField(
        id=_as_str(obj.get("id"), "model.id"),
        display_name=_as_str(obj.get("display_name"), "model.display_name"),
    )


def _parse_current_usage(value: Any) -> CurrentUsage | None:
    obj = _as_object(value, "current_usage")
    if obj is None:
        return None
    return CurrentUsage(
        **{
            name: _as_int(obj.get(name), name) or 0
            for name in (
                "input_tokens",
                "output_tokens",
                "cache_creation_input_tokens",
                "cache_read_input_tokens",
            )
        }
    )


def _parse_context_window(value: Any) -> ContextWindow | None:
    obj = _as_object(value, "context_window")
    if obj is None:
        return None
    return ContextWindow(
        total_input_tokens=_as_int(obj.get("total_input_tokens"), "total_input_tokens"),
        total_output_tokens=_as_int(obj.get("total_output_tokens"), "total_output_tokens"),
        context_window_size=_as_int(obj.get("context_window_size"), "context_window_size"),
        used_percentage=_as_float(obj.get("used_percentage"), "used_percentage"),
        remaining_percentage=_as_float(obj.get("remaining_percentage"), "remaining_percentage"),
        current_usage=_parse_current_usage(obj.get("current_usage")),
    )


def _parse_cost(value: Any) -> CostInfo | None:
    obj = _as_object(value, "cost")
    if obj is None:
        return None
    return CostInfo(
        total_cost_usd=_as_float(obj.get("total_cost_usd"), "total_cost_usd"),
        total_duration_ms=_as_float(obj.get("total_duration_ms"), "total_duration_ms"),
        total_api_duration_ms=_as_float(obj.get("total_api_duration_ms"), "total_api_duration_ms"),
        total_lines_added=_as_int(obj.get("total_lines_added"), "total_lines_added"),
        total_lines_removed=_as_int(obj.get("total_lines_removed"), "total_lines_removed"),
    )


def _parse_strings(value: Any, name: str, cls: type, keys: tuple[str, ...]) -> Any:
    obj = _as_object(value, name)
    if obj is None:
        return None
    return cls(**{key: _as_str(obj.get(key), f"{name}.{key}") for key in keys})


def parse(data: bytes | str) -> Session:
    """Parse the JSON payload; raises ValueError on malformed input."""
    raw = json.loads(data)
    if raw is None:
        return Session()
    obj = _as_object(raw, "session")
    return Session(
        cwd=_as_str(obj.get("cwd"), "cwd"),
        session_id=_as_str(obj.get("session_id"), "session_id"),
        transcript_path=_as_str(obj.get("transcript_path"), "transcript_path"),
        model=_parse_model(obj.get("model")),
        workspace=_parse_strings(
            obj.get("workspace"), "workspace", Workspace, ("current_dir", "project_dir")
        ),
        version=_as_str(obj.get("version"), "version"),
        output_style=_parse_strings(obj.get("output_style"), "output_style", OutputStyle, ("name",)),
        cost=_parse_cost(obj.get("cost")),
        context_window=_parse_context_window(obj.get("context_window")),
        exceeds_200k=_as_bool(obj.get("exceeds_200k_tokens"), "exceeds_200k_tokens"),
        vim=_parse_strings(obj.get("vim"), "vim", VimInfo, ("mode",)),
        agent=_parse_strings(obj.get("agent"), "agent", AgentInfo, ("name",)),
        worktree=_parse_strings(
            obj.get("worktree"),
            "worktree",
            WorktreeInfo,
            ("name", "path", "branch", "original_cwd", "original_branch"),
        ),
    )


@dataclass(frozen=True)
class WindowLimits:
    max_tokens: int
    usable_tokens: int


def _usable(size: int) -> int:
    product = size * DEFAULT_USABLE_RATIO
    return product // 100 if product >= 0 else -(-product // 100)


def format_tokens(count: int) -> str:
    """Format a token count: 500 -> "500", 1500 -> "1.5k", 1200000 -> "1.2M"."""
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 1000:
        return f"{count / 1000:.1f}k"
    return str(count)


def context_config(data: Session) -> WindowLimits:
    """Resolve the context window size, falling back to a model-based guess."""
    cw = data.context_window
    if cw is not None and cw.context_window_size is not None:
        size = cw.context_window_size
        return WindowLimits(max_tokens=size, usable_tokens=_usable(size))
    lower = data.model.id.lower()
    if "claude-sonnet-4-5" in lower and "[1m]" in lower:
        return WindowLimits(max_tokens=LONG_MAX_TOKENS, usable_tokens=_usable(LONG_MAX_TOKENS))
    return WindowLimits(max_tokens=DEFAULT_MAX_TOKENS, usable_tokens=_usable(DEFAULT_MAX_TOKENS))


def context_length(data: Session) -> int:
    """Sum of input, cache-creation and cache-read tokens of the current usage."""
    cw = data.context_window
    if cw is None or cw.current_usage is None:
        return 0
    cu = cw.current_usage
    return cu.input_tokens + cu.cache_creation_input_tokens + cu.cache_read_input_tokens


def context_percentage(data: Session) -> float | None:
    """Context usage percentage, or None when there is no data."""
    cw = data.context_window
    if cw is not None and cw.used_percentage is not None:
        return cw.used_percentage
    if cw is not None and cw.current_usage is not None:
        limits = context_config(data)
        if limits.max_tokens == 0:
            return None
        pct = context_length(data) / limits.max_tokens * 100
        return 100.0 if pct > 100 else pct
    return None


def remaining_percentage(data: Session) -> float | None:
    """Remaining context percentage, or None when there is no data."""
    cw = data.context_window
    if cw is not None and cw.remaining_percentage is not None:
        return cw.remaining_percentage
    used = context_percentage(data)
    if used is None:
        return None
    remaining = 100 - used
    return 0.0 if remaining < 0 else remaining


def cache_hit_rate(data: Session) -> float | None:
    """Share of cache-read tokens in the context, as a percentage."""
    total = context_length(data)
    if total == 0:
        return None
    return data.context_window.current_usage.cache_read_input_tokens / total * 100
"""Repository information read from the git command line tool."""

from __future__ import annotations

import os
import re
import subprocess
from dataclasses import dataclass

GIT_TIMEOUT = 5.0

_INTEGER = re.compile(r"[+-]?\d+")


@dataclass(frozen=True)
class DiffStat:
    """Lines added and removed."""

    added: int = 0
    removed: int = 0


def _run(*args: str) -> str | None:
    """Run git with the given arguments; None on any failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            timeout=GIT_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    return result.stdout.decode("utf-8", errors="replace")


def branch() -> str:
    """Current branch name, or "" outside a repository."""
    out = _run("rev-parse", "--abbrev-ref", "HEAD")
    return out.strip() if out is not None else ""


def changes() -> int:
    """Count of staged, unstaged and untracked changes; 0 on error."""
    out = _run("status", "--porcelain")
    if out is None:
        return 0
    trimmed = out.strip()
    if not trimmed:
        return 0
    return len(trimmed.split("\n"))


def worktree() -> str:
    """Name of the linked worktree, or "" in the main tree or outside a repository."""
    out = _run("rev-parse", "--git-dir")
    if out is None:
        return ""
    git_dir = out.strip()
    parent, name = os.path.split(git_dir)
    if name and os.path.basename(os.path.normpath(parent or ".")) == "worktrees":
        return name
    return ""


def parse_short_stat(line: str) -> DiffStat:
    """Parse the output of git diff --shortstat."""
    added = removed = 0
    if not line:
        return DiffStat()
    for part in line.split(","):
        fields = part.split()
        if len(fields) < 2 or not _INTEGER.fullmatch(fields[0]):
            continue
        count = int(fields[0])
        if "insertion" in fields[1]:
            added = count
        elif "deletion" in fields[1]:
            removed = count
    return DiffStat(added=added, removed=removed)


def _short_stat(*extra: str) -> DiffStat:
    out = _run("diff", "--shortstat", *extra)
    if out is None:
        return DiffStat()
    return parse_short_stat(out.strip())


def diff() -> DiffStat:
    """Lines added and removed, staged plus unstaged, against HEAD."""
    staged = _short_stat("--cached")
    unstaged = _short_stat()
    return DiffStat(
        added=staged.added + unstaged.added,
        removed=staged.removed + unstaged.removed,
    )
import subprocess

import pytest

from ccstatus import git
from ccstatus.widgets.base import (
    GitCache,
    RenderContext,
    Widget,
    shorten_home,
)


@pytest.fixture
def outside_repo(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    return tmp_path


@pytest.fixture
def repo(outside_repo):
    subprocess.run(
        ["git", "init", "-q"],
        cwd=outside_repo,
        check=True,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )
    return outside_repo


def test_shorten_home_nested_path(monkeypatch):
    monkeypatch.setenv("HOME", "/home/tester")
    assert shorten_home("/home/tester/projects/myapp") == "~/projects/myapp"


def test_shorten_home_exact_home(monkeypatch):
    monkeypatch.setenv("HOME", "/home/tester")
    assert shorten_home("/home/tester") == "~"


def test_shorten_home_outside_home(monkeypatch):
    monkeypatch.setenv("HOME", "/home/tester")
    assert shorten_home("/opt/projects/myapp") == "/opt/projects/myapp"


def test_shorten_home_sibling_prefix_not_shortened(monkeypatch):
    monkeypatch.setenv("HOME", "/home/tester")
    assert shorten_home("/home/tester2/x") == "/home/tester2/x"


def test_shorten_home_without_home(monkeypatch):
    monkeypatch.setenv("HOME", "")
    assert shorten_home("/home/tester/x") == "/home/tester/x"


def test_render_context_defaults():
    ctx = RenderContext()
    assert ctx.data is None
    assert ctx.terminal_width == 0
    assert isinstance(ctx.git, GitCache)


def test_render_contexts_get_separate_caches(repo):
    first = RenderContext()
    second = RenderContext()
    (repo / "a.txt").write_text("a")
    assert first.git.changes() == 1
    (repo / "b.txt").write_text("b")
    assert first.git.changes() == 1
    assert second.git.changes() == 2


def test_widget_is_abstract():
    with pytest.raises(TypeError):
        Widget()


def test_git_cache_outside_repository(outside_repo):
    cache = GitCache()
    assert cache.branch() == ""
    assert cache.changes() == 0
    assert cache.worktree() == ""
    assert cache.diff() == git.DiffStat()


def test_git_cache_changes_is_cached(repo):
    (repo / "a.txt").write_text("a")
    cache = GitCache()
    assert cache.changes() == 1
    (repo / "b.txt").write_text("b")
    assert cache.changes() == 1
    assert git.changes() == 2
    assert GitCache().changes() == 2


def test_git_cache_main_worktree_has_no_name(repo):
    assert GitCache().worktree() == ""
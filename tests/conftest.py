"""Pytest fixtures for git-worktree-plus tests"""
import io
import os
import tempfile
from pathlib import Path

import git
import pytest
from rich.console import Console

from git_worktree_plus.models.worktree import WorktreeRecord


EXAMPLE_PORCELAIN = (
    "worktree /repo\n"
    "HEAD abc123\n"
    "branch refs/heads/main\n"
    "\n"
    "worktree /repo/.worktrees/x\n"
    "HEAD def456\n"
    "branch refs/heads/feature/x\n"
    "\n"
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing (symlinks resolved)."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(os.path.realpath(tmpdir))


@pytest.fixture
def string_console():
    """A wide, colorless console that records everything printed to it."""
    return Console(file=io.StringIO(), width=200, color_system=None, highlight=False)


@pytest.fixture
def example_porcelain():
    """Porcelain output for a main worktree and one feature worktree."""
    return EXAMPLE_PORCELAIN


@pytest.fixture
def example_records():
    """Records matching example_porcelain."""
    return [
        WorktreeRecord(path="/repo", branch_ref="main", head_id="abc123", is_main=True),
        WorktreeRecord(path="/repo/.worktrees/x", branch_ref="feature/x", head_id="def456"),
    ]


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on main."""
    repo_path = temp_dir / "repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    repo.git.branch('-M', 'main')

    yield repo

    repo.close()


@pytest.fixture
def add_worktree(git_repo):
    """Factory that adds a worktree on a new branch and returns its path."""

    def _add(path, branch=None):
        path = str(path)
        if branch:
            git_repo.git.worktree("add", "-b", branch, path)
        else:
            git_repo.git.worktree("add", "--detach", path)
        return path

    return _add

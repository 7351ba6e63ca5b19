"""Command orchestration for git-worktree-plus."""

from .worktree_manager import WorktreeManager

__all__ = ["WorktreeManager"]

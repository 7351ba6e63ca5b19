"""Data models for git-worktree-plus."""

from .worktree import WorktreeRecord, MigrationPlan

__all__ = ["WorktreeRecord", "MigrationPlan"]

"""Worktree data models."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class WorktreeRecord:
    """One entry of a `git worktree list --porcelain` listing."""

    path: str
    branch_ref: str = ""  # Short branch name, refs/heads/ stripped
    head_id: str = ""
    is_main: bool = False  # Is this the main working tree?
    is_detached: bool = False

    @property
    def name(self) -> str:
        """Final path component of the worktree directory."""
        return os.path.basename(os.path.normpath(self.path))

    def __str__(self) -> str:
        """String representation of worktree."""
        main_marker = " (main)" if self.is_main else ""
        if self.branch_ref:
            return f"{self.path} [{self.branch_ref}]{main_marker}"
        return f"{self.path} [{self.head_id}]{main_marker}"


@dataclass(frozen=True)
class MigrationPlan:
    """A pending move of one worktree into the namespaced layout.

    Both paths are relative to the main worktree, e.g.
    ``../worktrees/feature/foo`` -> ``../worktrees/repo/feature/foo``.
    """

    current_relative_path: str
    suggested_relative_path: str

    def absolute_paths(self, main_worktree_path: str) -> tuple:
        """Return (old, new) absolute paths anchored at the main worktree."""
        old_path = os.path.normpath(os.path.join(main_worktree_path, self.current_relative_path))
        new_path = os.path.normpath(os.path.join(main_worktree_path, self.suggested_relative_path))
        return old_path, new_path

    def move_command(self) -> str:
        """Shell command a user can run from the repository root."""
        return f"git worktree move {self.current_relative_path} {self.suggested_relative_path}"

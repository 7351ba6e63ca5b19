"""Git-related services for git-worktree-plus."""

from .porcelain import parse_worktree_list
from .worktrees import WorktreeService

__all__ = [
    "parse_worktree_list",
    "WorktreeService",
]

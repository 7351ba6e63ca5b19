"""Worktree column formatting utilities."""

import os
from typing import Optional

from git_worktree_plus.constants import (
    DETACHED_HEAD_LABEL,
    HEAD_DISPLAY_LENGTH,
    MAIN_WORKTREE_ALIAS,
    MAIN_WORKTREE_LABEL,
    NO_BRANCH_LABEL,
    SYMBOL_CURRENT_WORKTREE,
)
from git_worktree_plus.formatters.path import is_within, normalize_path, relative_display_path
from git_worktree_plus.models.worktree import WorktreeRecord


def format_branch_display(record: WorktreeRecord) -> str:
    """
    Format the branch column following git's own wording.

    Args:
        record: Worktree record

    Returns:
        Branch name, "(detached HEAD)" or "(no branch)"
    """
    if record.branch_ref:
        return record.branch_ref
    if record.is_detached:
        return DETACHED_HEAD_LABEL
    return NO_BRANCH_LABEL


def format_head(head_id: str) -> str:
    """Abbreviate a commit id to its first eight characters."""
    return head_id[:HEAD_DISPLAY_LENGTH]


def format_path_display(record: WorktreeRecord, cwd: str, is_current: bool = False) -> str:
    """
    Format the path column.

    Args:
        record: Worktree record
        cwd: Directory the user is in
        is_current: Whether the user is inside this worktree

    Returns:
        "@ (main worktree)" or a cwd-relative path, with "*" appended for
        the current worktree
    """
    if record.is_main:
        label = MAIN_WORKTREE_LABEL
    else:
        label = relative_display_path(record.path, cwd)
    return label + (SYMBOL_CURRENT_WORKTREE if is_current else "")


def format_worktree_name(record: WorktreeRecord, base_dir: Optional[str] = None) -> str:
    """
    Short name a user can type to reach this worktree.

    Args:
        record: Worktree record
        base_dir: Absolute worktree base directory (optional)

    Returns:
        "@" for the main worktree, the path relative to base_dir for managed
        worktrees, otherwise the directory name
    """
    if record.is_main:
        return MAIN_WORKTREE_ALIAS
    if base_dir and is_within(record.path, base_dir, strict=True):
        return os.path.relpath(normalize_path(record.path), normalize_path(base_dir))
    return record.name

"""Formatting utilities for git-worktree-plus.

This package provides the formatting functions behind `wtp list`,
organized into logical modules:
- path: cwd-relative labels, cell widths, padding and truncation
- worktree: branch, head, path and name columns for a worktree
"""

# Path formatters
from .path import (
    display_width,
    pad_to_width,
    truncate_middle,
    normalize_path,
    is_within,
    relative_display_path,
    relative_to_repo,
)

# Worktree formatters
from .worktree import (
    format_branch_display,
    format_head,
    format_path_display,
    format_worktree_name,
)

__all__ = [
    # Path
    "display_width",
    "pad_to_width",
    "truncate_middle",
    "normalize_path",
    "is_within",
    "relative_display_path",
    "relative_to_repo",
    # Worktree
    "format_branch_display",
    "format_head",
    "format_path_display",
    "format_worktree_name",
]

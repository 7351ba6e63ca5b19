"""Shared constants for git-worktree-plus."""

from dataclasses import dataclass
from typing import List


@dataclass
class ColumnDefinition:
    """Definition of a listing column."""

    key: str
    label: str
    dashes: int  # Length of the separator under the header


# Column order of `wtp list`
COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("path", "PATH", 4),
    ColumnDefinition("branch", "BRANCH", 6),
    ColumnDefinition("head", "HEAD", 4),
]

COLUMN_SPACING = 1
HEAD_DISPLAY_LENGTH = 8
ELLIPSIS = "..."

# Symbol constants
SYMBOL_CURRENT_WORKTREE = "*"
MAIN_WORKTREE_ALIAS = "@"

# Display labels
MAIN_WORKTREE_LABEL = "@ (main worktree)"
DETACHED_HEAD_LABEL = "(detached HEAD)"
NO_BRANCH_LABEL = "(no branch)"
NO_WORKTREES_MESSAGE = "No worktrees found"

# Porcelain keys
PORCELAIN_WORKTREE = "worktree"
PORCELAIN_HEAD = "HEAD"
PORCELAIN_BRANCH = "branch"
PORCELAIN_DETACHED = "detached"
BRANCH_REF_PREFIX = "refs/heads/"

# Identifier resolution
ROOT_ALIASES = ("root", MAIN_WORKTREE_ALIAS)
ROOT_WORKTREE_SUFFIX = "(root worktree)"
COMPLETION_MARKER = "*"

# Legacy layout
LEGACY_BASE_DIR_NAME = "worktrees"
LEGACY_WARNING_EXAMPLE_LIMIT = 3

"""Resolve a user-supplied identifier to one worktree."""

import os
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from git_worktree_plus.config import Config
from git_worktree_plus.constants import (
    COMPLETION_MARKER,
    MAIN_WORKTREE_ALIAS,
    ROOT_ALIASES,
    ROOT_WORKTREE_SUFFIX,
)
from git_worktree_plus.exceptions import WorktreeNotFoundError
from git_worktree_plus.formatters import format_worktree_name, is_within, normalize_path
from git_worktree_plus.logging_config import get_logger
from git_worktree_plus.models.worktree import WorktreeRecord

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolutionContext:
    """Facts about the repository shared by every match pass."""

    main_worktree_path: str
    repo_name: str
    base_dir: Optional[str] = None  # Absolute; None disables managed-name matching

    def is_main(self, record: WorktreeRecord) -> bool:
        if record.is_main:
            return True
        if not self.main_worktree_path:
            return False
        return normalize_path(record.path) == normalize_path(self.main_worktree_path)


MatchPass = Tuple[str, Callable[[str, WorktreeRecord, ResolutionContext], bool]]


def normalize_identifier(identifier: str) -> str:
    """Drop the current-worktree marker that shell completion echoes back."""
    if identifier.endswith(COMPLETION_MARKER):
        return identifier[: -len(COMPLETION_MARKER)]
    return identifier


def matches_root_alias(identifier: str, record: WorktreeRecord, ctx: ResolutionContext) -> bool:
    """root, @, the repository directory name, or a "...(root worktree)" completion."""
    if not ctx.is_main(record):
        return False
    if identifier in ROOT_ALIASES or identifier == MAIN_WORKTREE_ALIAS + COMPLETION_MARKER:
        return True
    if identifier == ctx.repo_name:
        return True
    # Covers "<repo>(root worktree)" and "<repo>@<branch>(root worktree)"
    return identifier.endswith(ROOT_WORKTREE_SUFFIX)


def matches_branch(identifier: str, record: WorktreeRecord, ctx: ResolutionContext) -> bool:
    """Exact branch name, including prefixes such as feature/awesome."""
    return bool(record.branch_ref) and record.branch_ref == identifier


def matches_managed_name(identifier: str, record: WorktreeRecord, ctx: ResolutionContext) -> bool:
    """Path relative to the worktree base directory."""
    if not ctx.base_dir or ctx.is_main(record):
        return False
    if not is_within(record.path, ctx.base_dir, strict=True):
        return False
    return format_worktree_name(record, ctx.base_dir) == os.path.normpath(identifier)


def matches_directory_name(identifier: str, record: WorktreeRecord, ctx: ResolutionContext) -> bool:
    """Final component of the worktree path."""
    return record.name == identifier


# Ordered by priority; the first pass with any match wins
MATCH_PASSES: List[MatchPass] = [
    ("root alias", matches_root_alias),
    ("branch", matches_branch),
    ("managed name", matches_managed_name),
    ("directory name", matches_directory_name),
]


class WorktreeResolver:
    """Maps identifiers such as "@", "feature/x" or "x" to a worktree."""

    def __init__(self, config: Optional[Config] = None, passes: Optional[Sequence[MatchPass]] = None):
        """Initialize the resolver.

        Args:
            config: Repository configuration, enables base-dir relative names
            passes: Match passes in priority order (defaults to MATCH_PASSES)
        """
        self.config = config
        self.passes = list(passes) if passes is not None else list(MATCH_PASSES)

    def _context(self, records: Sequence[WorktreeRecord], main_worktree_path: Optional[str]) -> ResolutionContext:
        if not main_worktree_path:
            main_worktree_path = next((wt.path for wt in records if wt.is_main), "")
        repo_name = os.path.basename(os.path.normpath(main_worktree_path)) if main_worktree_path else ""
        base_dir = None
        if self.config is not None and main_worktree_path:
            base_dir = self.config.resolve_base_dir(main_worktree_path)
        return ResolutionContext(main_worktree_path, repo_name, base_dir)

    def find(
        self,
        identifier: str,
        records: Sequence[WorktreeRecord],
        main_worktree_path: Optional[str] = None,
    ) -> Optional[WorktreeRecord]:
        """Find the worktree an identifier refers to.

        Passes are tried in order; within a pass the earliest record in
        listing order wins.

        Returns:
            The matching record, or None
        """
        name = normalize_identifier(identifier)
        if not name:
            return None

        ctx = self._context(records, main_worktree_path)
        for pass_name, matches in self.passes:
            for record in records:
                if matches(name, record, ctx):
                    logger.debug(f"'{identifier}' matched {record} by {pass_name}")
                    return record

        logger.debug(f"'{identifier}' matched no worktree")
        return None

    def resolve(
        self,
        identifier: str,
        records: Sequence[WorktreeRecord],
        main_worktree_path: Optional[str] = None,
    ) -> WorktreeRecord:
        """Resolve an identifier to exactly one worktree.

        Raises:
            WorktreeNotFoundError: With the names the user could have typed
        """
        record = self.find(identifier, records, main_worktree_path)
        if record is None:
            raise WorktreeNotFoundError(identifier, self.available_names(records, main_worktree_path))
        return record

    def available_names(
        self,
        records: Sequence[WorktreeRecord],
        main_worktree_path: Optional[str] = None,
    ) -> List[str]:
        """Names that resolve to each worktree, main worktree advertised as "@"."""
        ctx = self._context(records, main_worktree_path)
        names = []
        for record in records:
            if ctx.is_main(record):
                names.append(MAIN_WORKTREE_ALIAS)
            else:
                names.append(format_worktree_name(record, ctx.base_dir))
        return names

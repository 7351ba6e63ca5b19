"""Parser for `git worktree list --porcelain` output."""

from typing import Any, Dict, List

from git_worktree_plus.constants import (
    BRANCH_REF_PREFIX,
    PORCELAIN_BRANCH,
    PORCELAIN_DETACHED,
    PORCELAIN_HEAD,
    PORCELAIN_WORKTREE,
)
from git_worktree_plus.logging_config import get_logger
from git_worktree_plus.models.worktree import WorktreeRecord

logger = get_logger(__name__)


def _build_record(fields: Dict[str, Any], is_main: bool) -> WorktreeRecord:
    is_detached = fields.get("detached", False)
    return WorktreeRecord(
        path=fields["path"],
        branch_ref="" if is_detached else fields.get("branch", ""),
        head_id=fields.get("HEAD", ""),
        is_main=is_main,
        is_detached=is_detached,
    )


def parse_worktree_list(output: str) -> List[WorktreeRecord]:
    """Parse porcelain worktree output into records, in emission order.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name   (or a bare "detached" line)
        (blank line between worktrees)

    The first block is the main worktree. Unknown lines are skipped and a
    block without a ``worktree`` line produces no record, so this never
    raises on unexpected input.
    """
    records: List[WorktreeRecord] = []
    current: Dict[str, Any] = {}

    def flush():
        if current.get("path"):
            records.append(_build_record(current, is_main=not records))
        elif current:
            logger.debug(f"Dropping worktree block without a path: {current}")
        current.clear()

    for raw_line in (output or "").splitlines():
        line = raw_line.rstrip("\r\n")

        if not line.strip():
            # Empty line marks end of worktree entry
            flush()
            continue

        key, _, value = line.partition(" ")

        if key == PORCELAIN_WORKTREE and value:
            if current:
                # Missing blank line between blocks
                flush()
            current["path"] = value
        elif not current.get("path"):
            logger.debug(f"Ignoring line outside a worktree block: {line!r}")
        elif key == PORCELAIN_HEAD and value:
            current["HEAD"] = value.strip()
        elif key == PORCELAIN_BRANCH and value:
            value = value.strip()
            if value.startswith(BRANCH_REF_PREFIX):
                value = value[len(BRANCH_REF_PREFIX):]
            current["branch"] = value
        elif key == PORCELAIN_DETACHED and not value:
            current["detached"] = True
        else:
            # bare, locked, prunable and future keys
            logger.debug(f"Ignoring porcelain line: {line!r}")

    # Handle last entry if no trailing blank line
    flush()

    logger.debug(f"Parsed {len(records)} worktrees")
    return records

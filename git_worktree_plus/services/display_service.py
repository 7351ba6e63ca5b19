"""Display and formatting service for worktree listings"""
from dataclasses import replace
from typing import List, Optional, Sequence

from rich.console import Console

from git_worktree_plus.config import Config
from git_worktree_plus.constants import COLUMN_SPACING, COLUMNS, NO_WORKTREES_MESSAGE
from git_worktree_plus.formatters import (
    display_width,
    format_branch_display,
    format_head,
    format_path_display,
    format_worktree_name,
    is_within,
    normalize_path,
    pad_to_width,
    truncate_middle,
)
from git_worktree_plus.logging_config import get_logger
from git_worktree_plus.models.worktree import WorktreeRecord

logger = get_logger(__name__)

PATH_COLUMN, BRANCH_COLUMN, HEAD_COLUMN = COLUMNS


def find_current_worktree(records: Sequence[WorktreeRecord], cwd: str) -> Optional[WorktreeRecord]:
    """The worktree cwd is in; the deepest one wins for nested worktrees."""
    current = None
    current_depth = -1
    for record in records:
        path = normalize_path(record.path, cwd)
        if is_within(cwd, path) and len(path) > current_depth:
            current = record
            current_depth = len(path)
    return current


class DisplayService:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def render_worktree_table(
            self,
            records: Sequence[WorktreeRecord],
            current_working_dir: str,
            main_worktree_path: Optional[str],
            terminal_width: int,
            max_path_width: Optional[int] = None,
        ) -> str:
        """Render the PATH/BRANCH/HEAD table.

        Column widths are measured in terminal cells. When the table does not
        fit terminal_width the PATH column is truncated first; BRANCH only
        gives up space once PATH is down to its header width.

        Args:
            records: Parsed worktrees, main worktree first
            current_working_dir: Directory the user runs the command from
            main_worktree_path: Path of the main worktree (falls back to the
                record flagged as main)
            terminal_width: Available columns; 0 or less disables fitting
            max_path_width: Optional cap for the PATH column
        """
        if not records:
            return NO_WORKTREES_MESSAGE

        current = find_current_worktree(records, current_working_dir)
        rows = []
        main_path = normalize_path(main_worktree_path) if main_worktree_path else None
        for record in records:
            is_current = record is current
            if not record.is_main and normalize_path(record.path, current_working_dir) == main_path:
                record = replace(record, is_main=True)
            rows.append((
                format_path_display(record, current_working_dir, is_current=is_current),
                format_branch_display(record),
                format_head(record.head_id),
            ))

        path_width = max([len(PATH_COLUMN.label)] + [display_width(row[0]) for row in rows])
        branch_width = max([len(BRANCH_COLUMN.label)] + [display_width(row[1]) for row in rows])
        head_width = max([len(HEAD_COLUMN.label)] + [display_width(row[2]) for row in rows])

        if max_path_width and max_path_width > 0:
            path_width = max(len(PATH_COLUMN.label), min(path_width, max_path_width))

        if terminal_width and terminal_width > 0:
            path_width, branch_width = self._fit_columns(path_width, branch_width, head_width, terminal_width)

        logger.debug(f"Column widths: path={path_width} branch={branch_width} head={head_width}")

        lines = [
            self._format_line(PATH_COLUMN.label, BRANCH_COLUMN.label, HEAD_COLUMN.label, path_width, branch_width),
            self._format_line(
                "-" * PATH_COLUMN.dashes,
                "-" * BRANCH_COLUMN.dashes,
                "-" * HEAD_COLUMN.dashes,
                path_width,
                branch_width,
            ),
        ]
        for path_display, branch_display, head_display in rows:
            lines.append(self._format_line(
                truncate_middle(path_display, path_width),
                truncate_middle(branch_display, branch_width),
                head_display,
                path_width,
                branch_width,
            ))
        return "\n".join(lines)

    @staticmethod
    def _fit_columns(path_width: int, branch_width: int, head_width: int, terminal_width: int):
        """Shrink PATH, then BRANCH, until a full row fits terminal_width."""
        fixed = head_width + 2 * COLUMN_SPACING
        overflow = path_width + branch_width + fixed - terminal_width
        if overflow > 0:
            path_width = max(len(PATH_COLUMN.label), path_width - overflow)
            overflow = path_width + branch_width + fixed - terminal_width
        if overflow > 0:
            branch_width = max(len(BRANCH_COLUMN.label), branch_width - overflow)
        return path_width, branch_width

    @staticmethod
    def _format_line(path: str, branch: str, head: str, path_width: int, branch_width: int) -> str:
        spacer = " " * COLUMN_SPACING
        line = pad_to_width(path, path_width) + spacer + pad_to_width(branch, branch_width) + spacer + head
        return line.rstrip()

    def render_worktree_names(
            self,
            records: Sequence[WorktreeRecord],
            config: Optional[Config] = None,
            main_worktree_path: Optional[str] = None,
        ) -> List[str]:
        """One name per worktree, as accepted by `wtp cd`."""
        base_dir = None
        if config is not None and main_worktree_path:
            base_dir = config.resolve_base_dir(main_worktree_path)
        return [format_worktree_name(record, base_dir) for record in records]

    def display_worktree_table(
            self,
            records: Sequence[WorktreeRecord],
            current_working_dir: str,
            main_worktree_path: Optional[str],
            terminal_width: int,
            max_path_width: Optional[int] = None,
        ) -> None:
        """Print the worktree table."""
        self.console.out(
            self.render_worktree_table(
                records, current_working_dir, main_worktree_path, terminal_width, max_path_width
            ),
            highlight=False,
        )

    def display_worktree_names(
            self,
            records: Sequence[WorktreeRecord],
            config: Optional[Config] = None,
            main_worktree_path: Optional[str] = None,
        ) -> None:
        """Print one worktree name per line."""
        for name in self.render_worktree_names(records, config, main_worktree_path):
            self.console.out(name, highlight=False)

"""Path labels and terminal cell-width utilities."""

import os

from rich.cells import cell_len, get_character_cell_size, set_cell_size

from git_worktree_plus.constants import ELLIPSIS


def display_width(text: str) -> int:
    """
    Number of terminal columns text occupies.

    East-Asian wide and fullwidth characters (and most emoji) take two
    columns, so this differs from len() for CJK content.
    """
    return cell_len(text)


def pad_to_width(text: str, width: int) -> str:
    """Left-justify text to width terminal columns."""
    return text + " " * max(0, width - display_width(text))


def truncate_middle(text: str, max_width: int) -> str:
    """
    Shorten text to at most max_width columns, keeping both ends.

    One third of the budget goes to the start and two thirds to the end,
    since the end of a path is the worktree directory name.

    Example:
        truncate_middle("../worktrees/repo/feature/long-name", 20)
        -> "../wo...re/long-name"
    """
    if display_width(text) <= max_width:
        return text
    if max_width <= 0:
        return ""
    if max_width <= len(ELLIPSIS):
        return set_cell_size(text, max_width)

    available = max_width - len(ELLIPSIS)
    start_budget = available // 3
    end_budget = available - start_budget

    start_chars = []
    used = 0
    for char in text:
        size = get_character_cell_size(char)
        if used + size > start_budget:
            break
        start_chars.append(char)
        used += size

    end_chars = []
    used = 0
    for char in reversed(text):
        size = get_character_cell_size(char)
        if used + size > end_budget:
            break
        end_chars.append(char)
        used += size

    return "".join(start_chars) + ELLIPSIS + "".join(reversed(end_chars))


def normalize_path(path: str, base: str = "") -> str:
    """Absolute, normalized form of path; relative paths are anchored at base."""
    if base and not os.path.isabs(path):
        path = os.path.join(base, path)
    return os.path.normpath(os.path.abspath(path))


def is_within(path: str, directory: str, strict: bool = False) -> bool:
    """
    Whether path lies inside directory.

    Args:
        path: Candidate path
        directory: Containing directory
        strict: If True, directory itself does not count as inside
    """
    path = normalize_path(path)
    directory = normalize_path(directory)
    if path == directory:
        return not strict
    return path.startswith(directory.rstrip(os.sep) + os.sep)


def relative_display_path(path: str, cwd: str) -> str:
    """
    Label for path as seen from cwd.

    Uses ``..`` segments for paths outside cwd. The absolute path is only
    returned when it is shorter than the relative form (or when no relative
    form exists, e.g. a different drive on Windows).
    """
    absolute = normalize_path(path, cwd)
    try:
        relative = os.path.relpath(absolute, normalize_path(cwd))
    except ValueError:
        return absolute

    if display_width(relative) <= display_width(absolute):
        return relative
    return absolute


def relative_to_repo(main_worktree_path: str, target_path: str) -> str:
    """
    Path of target relative to the main worktree, never absolute.

    Example:
        relative_to_repo("/src/repo", "/src/worktrees/foo") -> "../worktrees/foo"
    """
    try:
        return os.path.relpath(normalize_path(target_path), normalize_path(main_worktree_path))
    except ValueError:
        return target_path

"""Capabilities injected into the worktree manager.

Each has a process-backed default; tests pass their own implementations.
"""

import os
from typing import Optional

from rich.console import Console

from git_worktree_plus.services.git.worktrees import WorktreeService

DEFAULT_TERMINAL_WIDTH = 80


class WorkingDirectoryProvider:
    """Supplies the directory the command runs from."""

    def get_cwd(self) -> str:
        return os.getcwd()


class StaticWorkingDirectory(WorkingDirectoryProvider):
    """Fixed working directory."""

    def __init__(self, path: str):
        self.path = path

    def get_cwd(self) -> str:
        return self.path


class RepositoryFactory:
    """Opens the git collaborator for a directory."""

    def open(self, path: str) -> WorktreeService:
        """Raises NotInGitRepositoryError when path is not in a repository."""
        return WorktreeService(path)


class TerminalWidthProvider:
    """Supplies the number of columns available for output."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console

    def get_width(self) -> int:
        # rich falls back to 80 columns when stdout is not a terminal
        console = self.console or Console()
        return console.width or DEFAULT_TERMINAL_WIDTH


class FixedTerminalWidth(TerminalWidthProvider):
    """Constant terminal width."""

    def __init__(self, width: int):
        super().__init__()
        self.width = width

    def get_width(self) -> int:
        return self.width

"""Worktree operations service for git-worktree-plus."""

from typing import List, Optional

import git

from git_worktree_plus.exceptions import GitOperationError, NotInGitRepositoryError
from git_worktree_plus.models.worktree import WorktreeRecord
from git_worktree_plus.services.git.porcelain import parse_worktree_list
from git_worktree_plus.logging_config import get_logger

logger = get_logger(__name__)


def _describe_git_error(command: str, e: git.exc.CommandError) -> str:
    """Build a readable message from a failed or missing git command."""
    if isinstance(e, git.exc.GitCommandNotFound):
        return f"{command} failed: git executable not found"

    stderr = (e.stderr if hasattr(e, "stderr") and e.stderr else str(e)).strip()
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:"):].strip().strip("'").strip()
    status = e.status if hasattr(e, "status") else "unknown"

    if stderr:
        return f"{command} failed (exit {status}): {stderr}"
    return f"{command} failed with exit code {status}"


class WorktreeService:
    """Service for running git worktree commands against one repository."""

    def __init__(self, repo_path: str):
        """Initialize the worktree service.

        Args:
            repo_path: Any directory inside the git repository

        Raises:
            NotInGitRepositoryError: If repo_path is not inside a repository
        """
        self.repo_path = repo_path
        try:
            self._repo = git.Repo(repo_path, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise NotInGitRepositoryError(repo_path) from e

    def list_worktrees_output(self) -> str:
        """Raw `git worktree list --porcelain` output.

        Raises:
            GitOperationError: If git fails
        """
        logger.debug(f"Listing worktrees from {self.repo_path}")
        try:
            return self._repo.git.worktree("list", "--porcelain")
        except git.exc.CommandError as e:
            message = _describe_git_error("git worktree list", e)
            logger.error(f"Could not list worktrees: {message}")
            raise GitOperationError("worktree list", message) from e

    def get_worktrees(self) -> List[WorktreeRecord]:
        """Get all worktrees of the repository, main worktree first."""
        return parse_worktree_list(self.list_worktrees_output())

    def get_main_worktree_path(self, worktrees: Optional[List[WorktreeRecord]] = None) -> str:
        """Path of the main worktree.

        Args:
            worktrees: Already parsed listing to reuse (optional)

        Raises:
            GitOperationError: If the listing is empty
        """
        if worktrees is None:
            worktrees = self.get_worktrees()
        for wt in worktrees:
            if wt.is_main:
                return wt.path
        raise GitOperationError("find main worktree", "git reported no worktrees")

    def move_worktree(self, old_path: str, new_path: str) -> None:
        """Move a worktree with `git worktree move`.

        Git updates its own administrative files, so a successful call leaves
        the repository consistent.

        Raises:
            GitOperationError: If git refuses or fails to move the worktree
        """
        logger.debug(f"Moving worktree {old_path} -> {new_path}")
        try:
            self._repo.git.worktree("move", old_path, new_path)
        except git.exc.CommandError as e:
            message = _describe_git_error("git worktree move", e)
            logger.error(f"Failed to move worktree at {old_path}: {message}")
            raise GitOperationError("worktree move", message) from e

        logger.info(f"Moved worktree {old_path} to {new_path}")

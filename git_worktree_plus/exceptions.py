"""Custom exceptions for git-worktree-plus"""

from typing import Iterable, Optional


class WorktreePlusError(Exception):
    """Base exception for all git-worktree-plus errors."""
    pass


class GitOperationError(WorktreePlusError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class NotInGitRepositoryError(WorktreePlusError):
    """Exception raised when the working directory is not inside a repository."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"not a git repository: {path} (run 'git init' or cd into a repository)")


class WorktreeNotFoundError(WorktreePlusError):
    """Exception raised when an identifier does not resolve to a worktree."""

    def __init__(self, name: str, available: Iterable[str] = ()):
        self.name = name
        self.available = list(available)

        error_msg = f"worktree '{name}' not found"
        if self.available:
            error_msg += f" (available: {', '.join(self.available)})"
        else:
            error_msg += " (no worktrees found)"

        super().__init__(error_msg)


class MigrationError(WorktreePlusError):
    """Exception raised when moving a worktree to the namespaced layout fails."""

    def __init__(self, relative_path: str, cause: Exception):
        self.relative_path = relative_path
        self.cause = cause
        super().__init__(f"failed to migrate worktree {relative_path}: {cause}")


class ConfigError(WorktreePlusError):
    """Exception raised when the configuration file cannot be read or written."""

    def __init__(self, operation: str, path: str, message: str):
        self.operation = operation
        self.path = path
        self.message = message
        super().__init__(f"failed to {operation} configuration {path}: {message}")

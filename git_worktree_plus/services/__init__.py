"""Services for git-worktree-plus."""

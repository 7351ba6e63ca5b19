"""Command-line interface for git-worktree-plus"""

import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from git_worktree_plus.cli.args import parse_args
from git_worktree_plus.core import WorktreeManager
from git_worktree_plus.exceptions import WorktreePlusError
from git_worktree_plus.logging_config import setup_logging

err_console = Console(stderr=True, highlight=False)


def main(argv: Optional[List[str]] = None, manager: Optional[WorktreeManager] = None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    try:
        manager = manager or WorktreeManager(err_console=err_console)

        if parsed_args.command in ("list", "ls"):
            manager.list_worktrees(quiet=parsed_args.quiet, max_path_width=parsed_args.max_path_width)
        elif parsed_args.command == "cd":
            manager.cd(parsed_args.worktree_name)
        elif parsed_args.command == "migrate-worktrees":
            manager.migrate_worktrees(dry_run=parsed_args.dry_run, new_base_dir=parsed_args.new_base_dir)

        return 0
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except WorktreePlusError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        if parsed_args.debug:
            err_console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())

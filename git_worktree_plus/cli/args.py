"""Command-line argument parsing for git-worktree-plus."""

import argparse
import os
from typing import List, Optional

from git_worktree_plus.__version__ import __version__

MAX_PATH_WIDTH_ENV = "WTP_LIST_MAX_PATH"


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{value}'") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{value}'")
    return number


def _default_max_path_width() -> Optional[int]:
    """PATH column cap from the environment, ignored when invalid."""
    value = os.environ.get(MAX_PATH_WIDTH_ENV, "")
    if value.isdigit() and int(value) > 0:
        return int(value)
    return None


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="wtp",
        description="Git worktrees with automatic branch tracking and tidy directory layout",
        epilog="Shell integration: cd \"$(wtp cd <worktree-name>)\"",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"wtp {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.required = True

    list_parser = subparsers.add_parser(
        "list",
        aliases=["ls"],
        help="List all worktrees",
        description="Shows all worktrees with their paths, branches, and HEAD commits.",
    )
    list_parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only display worktree names"
    )
    list_parser.add_argument(
        "--max-path-width",
        type=_positive_int,
        metavar="N",
        default=_default_max_path_width(),
        help=f"Maximum width for the PATH column (default: ${MAX_PATH_WIDTH_ENV} or unlimited)",
    )

    cd_parser = subparsers.add_parser(
        "cd",
        help="Output absolute path to worktree",
        description="Output the absolute path to the specified worktree. "
        "Accepts a branch name, a directory name, or '@'/'root' for the main worktree.",
    )
    cd_parser.add_argument("worktree_name", metavar="<worktree-name>")

    migrate_parser = subparsers.add_parser(
        "migrate-worktrees",
        help="Migrate legacy worktrees to namespaced layout",
        description="Moves worktrees from ../worktrees/<name> to ../worktrees/<repo>/<name> "
        "and sets namespace_by_repo: true in .wtp.yml.",
    )
    migrate_parser.add_argument(
        "-n", "--dry-run", action="store_true", help="Preview changes without making them"
    )
    migrate_parser.add_argument(
        "--new-base-dir",
        metavar="DIR",
        help="Move worktrees to a new base directory (e.g., ../worktrees)",
    )

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)

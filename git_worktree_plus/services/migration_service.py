"""Detection and migration of legacy (non-namespaced) worktree layouts"""

import os
from dataclasses import replace
from typing import List, Optional, Sequence

from rich.console import Console

from git_worktree_plus.config import Config, has_config_file, save_config
from git_worktree_plus.constants import LEGACY_BASE_DIR_NAME, LEGACY_WARNING_EXAMPLE_LIMIT
from git_worktree_plus.exceptions import MigrationError, WorktreePlusError
from git_worktree_plus.formatters import is_within, normalize_path, relative_to_repo
from git_worktree_plus.logging_config import get_logger
from git_worktree_plus.models.worktree import MigrationPlan, WorktreeRecord
from git_worktree_plus.services.git.worktrees import WorktreeService

logger = get_logger(__name__)


class MigrationService:
    """Moves worktrees from ``<base>/<tail>`` to ``<base>/<repo>/<tail>``."""

    def __init__(self, worktree_service: Optional[WorktreeService] = None, console: Optional[Console] = None):
        """Initialize the migration service.

        Args:
            worktree_service: Git collaborator used to move worktrees
            console: Where plans and progress are printed
        """
        self.worktree_service = worktree_service
        self.console = console or Console(highlight=False)

    def detect(
        self,
        main_worktree_path: str,
        config: Config,
        records: Sequence[WorktreeRecord],
        legacy_base_dir: Optional[str] = None,
        target_base_dir: Optional[str] = None,
    ) -> List[MigrationPlan]:
        """Find worktrees that still sit in the legacy layout.

        Args:
            main_worktree_path: Path of the main worktree
            config: Configuration that defines the new base directory
            records: Parsed worktree listing
            legacy_base_dir: Directory holding legacy worktrees; defaults to
                a ``worktrees`` directory next to the repository
            target_base_dir: Directory to move worktrees under; defaults to
                legacy_base_dir

        Returns:
            One plan per legacy worktree, in listing order, with both paths
            relative to the main worktree
        """
        if not main_worktree_path:
            return []

        main_path = normalize_path(main_worktree_path)
        repo_name = os.path.basename(main_path)
        new_base_dir = config.resolve_base_dir(main_path)
        if legacy_base_dir:
            legacy_base_dir = normalize_path(legacy_base_dir, main_path)
        else:
            legacy_base_dir = os.path.join(os.path.dirname(main_path), LEGACY_BASE_DIR_NAME)
        target_base_dir = normalize_path(target_base_dir, main_path) if target_base_dir else legacy_base_dir

        if legacy_base_dir == new_base_dir:
            logger.debug(f"Base directory {new_base_dir} is the legacy location, nothing to detect")
            return []

        plans = []
        for record in records:
            if record.is_main:
                continue

            worktree_path = normalize_path(record.path, main_path)
            if is_within(worktree_path, new_base_dir):
                continue
            if not is_within(worktree_path, legacy_base_dir, strict=True):
                continue

            legacy_rel = os.path.relpath(worktree_path, legacy_base_dir)
            if legacy_rel.split(os.sep)[0] == repo_name:
                # Already under <base>/<repo>/...
                continue

            suggested_path = os.path.join(target_base_dir, repo_name, legacy_rel)
            plans.append(MigrationPlan(
                current_relative_path=relative_to_repo(main_path, worktree_path),
                suggested_relative_path=relative_to_repo(main_path, suggested_path),
            ))

        logger.debug(f"Detected {len(plans)} legacy worktrees")
        return plans

    def warn_legacy_layout(
        self,
        main_worktree_path: str,
        config: Config,
        records: Sequence[WorktreeRecord],
        console: Optional[Console] = None,
    ) -> bool:
        """Print move suggestions for legacy worktrees.

        Nothing is printed when ``.wtp.yml`` exists at the repository root,
        since the user has already chosen a layout.

        Returns:
            True if a warning was printed
        """
        if not main_worktree_path or not records:
            return False
        if has_config_file(main_worktree_path):
            return False

        plans = self.detect(main_worktree_path, config, records)
        if not plans:
            return False

        out = console or self.console
        repo_name = os.path.basename(normalize_path(main_worktree_path))
        out.print("[yellow]⚠️  Legacy worktree layout detected.[/yellow]")
        out.print(
            f"    wtp now expects worktrees under '../worktrees/{repo_name}/...'", markup=False, soft_wrap=True
        )
        out.print("    Move existing worktrees to the new layout (run from the repository root):")
        for plan in plans[:LEGACY_WARNING_EXAMPLE_LIMIT]:
            out.print(f"      {plan.move_command()}", markup=False, soft_wrap=True)
        if len(plans) > LEGACY_WARNING_EXAMPLE_LIMIT:
            out.print(f"      ... and {len(plans) - LEGACY_WARNING_EXAMPLE_LIMIT} more")
        out.print(
            "    (Alternatively, run 'wtp migrate-worktrees', or create .wtp.yml and set "
            "defaults.base_dir to keep a custom layout.)",
            markup=False,
        )
        out.print()
        return True

    def migrate(
        self,
        plans: Sequence[MigrationPlan],
        main_worktree_path: str,
        config: Config,
        dry_run: bool = False,
        new_base_dir: Optional[str] = None,
    ) -> Optional[Config]:
        """Move every planned worktree, stopping at the first failure.

        Worktrees moved before a failure stay at their new location; git's
        move is atomic per worktree so each one is consistent. Once all moves
        succeed the configuration is switched to the namespaced layout and
        saved.

        Args:
            plans: Output of detect()
            main_worktree_path: Path of the main worktree
            config: Current configuration
            dry_run: Only print the plan
            new_base_dir: base_dir to persist alongside the layout change

        Returns:
            The saved configuration, or None for a dry run

        Raises:
            MigrationError: Naming the worktree that could not be moved
            ConfigError: If the updated configuration cannot be saved
        """
        for plan in plans:
            old_path, new_path = plan.absolute_paths(main_worktree_path)

            self.console.print(f"  {plan.current_relative_path}", markup=False, soft_wrap=True)
            self.console.print(f"    From: {old_path}", markup=False, soft_wrap=True)
            self.console.print(f"    To:   {new_path}", markup=False, soft_wrap=True)
            self.console.print()

            if dry_run:
                continue

            try:
                os.makedirs(os.path.dirname(new_path), exist_ok=True)
                self.worktree_service.move_worktree(old_path, new_path)
            except (OSError, WorktreePlusError) as e:
                raise MigrationError(plan.current_relative_path, e) from e

            logger.info(f"Migrated {plan.current_relative_path} -> {plan.suggested_relative_path}")

        if dry_run:
            return None
        return self._mark_namespaced(main_worktree_path, config, new_base_dir)

    def _mark_namespaced(self, main_worktree_path: str, config: Config, new_base_dir: Optional[str] = None) -> Config:
        """Persist the namespaced layout (and a new base_dir) after a migration."""
        updated = replace(config, namespace_by_repo=True)
        if new_base_dir:
            updated = replace(updated, base_dir=new_base_dir)
        save_config(main_worktree_path, updated)
        return updated

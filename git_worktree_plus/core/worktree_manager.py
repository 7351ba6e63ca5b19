"""Core functionality for git-worktree-plus"""

import os
from dataclasses import replace
from typing import List, Optional, Tuple

from rich.console import Console

from git_worktree_plus.config import Config, load_config
from git_worktree_plus.models.worktree import WorktreeRecord
from git_worktree_plus.providers import RepositoryFactory, TerminalWidthProvider, WorkingDirectoryProvider
from git_worktree_plus.services.display_service import DisplayService
from git_worktree_plus.services.git.worktrees import WorktreeService
from git_worktree_plus.services.migration_service import MigrationService
from git_worktree_plus.services.resolver_service import WorktreeResolver
from git_worktree_plus.logging_config import get_logger

logger = get_logger(__name__)


class WorktreeManager:
    """Runs the list, cd and migrate-worktrees commands."""

    def __init__(
        self,
        cwd_provider: Optional[WorkingDirectoryProvider] = None,
        repository_factory: Optional[RepositoryFactory] = None,
        width_provider: Optional[TerminalWidthProvider] = None,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        """Initialize WorktreeManager.

        Args:
            cwd_provider: Source of the working directory
            repository_factory: Opens the git collaborator for a directory
            width_provider: Source of the terminal width for `list`
            console: Command output (stdout)
            err_console: Warnings (stderr)
        """
        self.cwd_provider = cwd_provider or WorkingDirectoryProvider()
        self.repository_factory = repository_factory or RepositoryFactory()
        self.width_provider = width_provider or TerminalWidthProvider()
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)
        self.display_service = DisplayService(self.console)

    def _load_worktrees(self) -> Tuple[str, WorktreeService, List[WorktreeRecord], str]:
        """Open the repository around cwd and list its worktrees."""
        cwd = self.cwd_provider.get_cwd()
        service = self.repository_factory.open(cwd)
        records = service.get_worktrees()
        main_path = service.get_main_worktree_path(records) if records else ""
        logger.debug(f"cwd={cwd} main={main_path} worktrees={len(records)}")
        return cwd, service, records, main_path

    def list_worktrees(self, quiet: bool = False, max_path_width: Optional[int] = None) -> None:
        """Print the worktree table, or only worktree names when quiet."""
        cwd, _, records, main_path = self._load_worktrees()

        if not records:
            if not quiet:
                self.console.out(self.display_service.render_worktree_table([], cwd, None, 0))
            return

        config = load_config(main_path)

        if quiet:
            self.display_service.display_worktree_names(records, config, main_path)
            return

        MigrationService(console=self.err_console).warn_legacy_layout(main_path, config, records)
        self.display_service.display_worktree_table(
            records, cwd, main_path, self.width_provider.get_width(), max_path_width
        )

    def resolve_worktree_path(self, worktree_name: str) -> str:
        """Absolute path of the worktree a name refers to.

        Raises:
            WorktreeNotFoundError: If no worktree matches
        """
        _, _, records, main_path = self._load_worktrees()
        config = load_config(main_path) if main_path else None
        record = WorktreeResolver(config).resolve(worktree_name, records, main_path)
        return record.path

    def cd(self, worktree_name: str) -> str:
        """Print the resolved path for the shell wrapper to cd into."""
        path = self.resolve_worktree_path(worktree_name)
        self.console.out(path, highlight=False)
        return path

    def migrate_worktrees(self, dry_run: bool = False, new_base_dir: Optional[str] = None) -> Optional[Config]:
        """Move legacy worktrees into ``<base_dir>/<repo>/`` and update .wtp.yml.

        Args:
            dry_run: Only print what would be moved
            new_base_dir: Consolidate worktrees under a different base_dir

        Returns:
            The saved configuration, or None when nothing was written

        Raises:
            MigrationError: If a move fails; earlier moves are kept
            ConfigError: If .wtp.yml cannot be read or written
        """
        _, service, records, main_path = self._load_worktrees()
        config = load_config(main_path)
        repo_name = os.path.basename(os.path.normpath(main_path))

        repo_specific_base_dir = f"../{repo_name}-worktrees"
        if not new_base_dir and config.base_dir == repo_specific_base_dir:
            self.console.print(f"💡 Detected repo-specific base_dir: {config.base_dir}", markup=False, soft_wrap=True)
            self.console.print("   With namespacing, you can consolidate to: ../worktrees")
            self.console.print("   Use --new-base-dir=../worktrees to migrate and update config\n")

        target_config = replace(
            config, namespace_by_repo=True, base_dir=new_base_dir or config.base_dir
        )
        migration_service = MigrationService(service, self.console)
        plans = migration_service.detect(
            main_path,
            target_config,
            records,
            legacy_base_dir=config.resolve_base_dir(main_path, namespaced=False),
            target_base_dir=new_base_dir,
        )

        if not plans and not new_base_dir:
            if config.should_namespace_by_repo():
                self.console.print("✅ Already using namespaced layout, nothing to migrate")
            else:
                self.console.print("✅ No legacy worktrees found to migrate")
            return None

        if dry_run:
            self.console.print(f"🔍 DRY RUN: Would migrate {len(plans)} worktree(s):")
        else:
            self.console.print(f"📦 Migrating {len(plans)} worktree(s) to namespaced layout...")
        if new_base_dir:
            self.console.print(f"   Moving to new base_dir: {new_base_dir}", markup=False, soft_wrap=True)
        self.console.print()

        updated = migration_service.migrate(plans, main_path, config, dry_run=dry_run, new_base_dir=new_base_dir)

        if dry_run:
            self.console.print("💡 Run without --dry-run to perform migration")
            return None

        self.console.print("✅ Migration complete!")
        self.console.print("\nUpdated .wtp.yml with:")
        self.console.print("  defaults:")
        if new_base_dir:
            self.console.print(f"    base_dir: {updated.base_dir}", markup=False, soft_wrap=True)
        self.console.print("    namespace_by_repo: true")
        return updated

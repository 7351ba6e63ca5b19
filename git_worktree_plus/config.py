"""Configuration handling for git-worktree-plus"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from git_worktree_plus.exceptions import ConfigError
from git_worktree_plus.logging_config import get_logger

logger = get_logger(__name__)

CONFIG_FILE_NAME = ".wtp.yml"
CURRENT_VERSION = "1.0"
DEFAULT_BASE_DIR = "../worktrees"


@dataclass
class Config:
    """Repository configuration stored in ``.wtp.yml`` with validation."""

    version: str = CURRENT_VERSION
    base_dir: str = DEFAULT_BASE_DIR
    # None = no explicit choice; treated as the namespaced layout
    namespace_by_repo: Optional[bool] = None
    # Post-create hooks are kept verbatim so saving never drops them
    hooks: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_version()
        self._validate_base_dir()
        self._validate_namespace_by_repo()
        self._validate_hooks()

    def _validate_version(self):
        """Fill in the current version when missing."""
        if not self.version:
            self.version = CURRENT_VERSION
        self.version = str(self.version)

    def _validate_base_dir(self):
        """Validate base_dir is a non-empty string."""
        if self.base_dir is None or not str(self.base_dir).strip():
            self.base_dir = DEFAULT_BASE_DIR
        if not isinstance(self.base_dir, str):
            raise ValueError(f"base_dir must be a string, got {type(self.base_dir).__name__}")
        self.base_dir = self.base_dir.strip()

    def _validate_namespace_by_repo(self):
        """Validate namespace_by_repo is a boolean when set."""
        if self.namespace_by_repo is not None and not isinstance(self.namespace_by_repo, bool):
            raise ValueError(f"namespace_by_repo must be true or false, got '{self.namespace_by_repo}'")

    def _validate_hooks(self):
        """Validate hooks section is a mapping."""
        if self.hooks is None:
            self.hooks = {}
        if not isinstance(self.hooks, dict):
            raise ValueError("hooks must be a mapping")

    def should_namespace_by_repo(self) -> bool:
        """Whether worktrees live under ``<base_dir>/<repo name>/``."""
        return self.namespace_by_repo is not False

    def resolve_base_dir(self, repo_root: str, namespaced: Optional[bool] = None) -> str:
        """Absolute directory that holds this repository's worktrees.

        Args:
            repo_root: Path of the main worktree
            namespaced: Override the configured namespacing choice
        """
        repo_root = os.path.normpath(os.path.abspath(repo_root))
        base_dir = os.path.expanduser(self.base_dir)
        if not os.path.isabs(base_dir):
            base_dir = os.path.join(repo_root, base_dir)
        base_dir = os.path.normpath(base_dir)

        if namespaced is None:
            namespaced = self.should_namespace_by_repo()
        if namespaced:
            base_dir = os.path.join(base_dir, os.path.basename(repo_root))
        return base_dir

    def resolve_worktree_path(self, repo_root: str, worktree_name: str) -> str:
        """Full path for a worktree given its name."""
        return os.path.normpath(os.path.join(self.resolve_base_dir(repo_root), worktree_name))

    def to_dict(self) -> dict:
        """Convert config to the on-disk YAML structure."""
        defaults: Dict[str, Any] = {"base_dir": self.base_dir}
        if self.namespace_by_repo is not None:
            defaults["namespace_by_repo"] = self.namespace_by_repo

        data: Dict[str, Any] = {"version": self.version, "defaults": defaults}
        if self.hooks:
            data["hooks"] = self.hooks
        return data

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from the on-disk YAML structure.

        A file that does not mention ``namespace_by_repo`` predates the
        namespaced layout, so it is read as an explicit legacy choice.
        """
        defaults = config_dict.get("defaults") or {}
        if not isinstance(defaults, dict):
            raise ValueError("defaults must be a mapping")

        return cls(
            version=config_dict.get("version") or CURRENT_VERSION,
            base_dir=defaults.get("base_dir") or DEFAULT_BASE_DIR,
            namespace_by_repo=defaults.get("namespace_by_repo", False),
            hooks=config_dict.get("hooks") or {},
        )


def config_path(repo_root: str) -> str:
    """Location of the configuration file for a repository."""
    return os.path.join(repo_root, CONFIG_FILE_NAME)


def has_config_file(repo_root: str) -> bool:
    """Whether the user already made an explicit configuration choice."""
    return os.path.isfile(config_path(repo_root))


def load_config(repo_root: str) -> Config:
    """Load configuration from ``.wtp.yml`` in the repository root.

    Returns the default configuration when the file does not exist.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated
    """
    path = config_path(os.path.abspath(repo_root))
    if not os.path.exists(path):
        logger.debug(f"No configuration at {path}, using defaults")
        return Config()

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError("load", path, str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigError("load", path, f"invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("load", path, "top-level document must be a mapping")

    try:
        config = Config.from_dict(data)
    except ValueError as e:
        raise ConfigError("load", path, str(e)) from e

    logger.debug(f"Loaded configuration from {path}: {config.to_dict()}")
    return config


def save_config(repo_root: str, config: Config) -> None:
    """Write configuration to ``.wtp.yml`` in the repository root.

    Raises:
        ConfigError: If the file cannot be written
    """
    path = config_path(repo_root)
    try:
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
        os.chmod(path, 0o600)
    except OSError as e:
        raise ConfigError("save", path, str(e)) from e

    logger.info(f"Saved configuration to {path}")


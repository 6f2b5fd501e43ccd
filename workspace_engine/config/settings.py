"""
Configuration settings for the workspace engine.
"""

import os
from typing import Optional

from dotenv import load_dotenv

from workspace_engine.exceptions import ConfigurationError

ENV_LOCAL_FILE = ".env.local"
ENV_DEFAULT_FILE = ".env"


def load_environment(base_dir: Optional[str] = None) -> str:
    """
    Load environment variables from ``.env.local`` or ``.env``.

    The first file found in ``base_dir`` (default: current directory) wins and
    overrides the process environment. Without any file the process
    environment is used as-is.

    Returns:
        The source the environment was loaded from
    """
    base = base_dir or os.getcwd()
    for name in (ENV_LOCAL_FILE, ENV_DEFAULT_FILE):
        candidate = os.path.join(base, name)
        if os.path.isfile(candidate):
            _ = load_dotenv(candidate, override=True)
            return name
    return "process-env-only"


class Settings:
    """Engine settings loaded from environment variables."""

    max_write_bytes: int = 200 * 1024
    max_changed_lines: int = 400
    view_default_lines: int = 500
    view_max_chars: int = 20_000
    search_max_matches_per_file: int = 3
    search_preview_chars: int = 200
    search_max_files: int = 20_000

    def __init__(
        self,
        workspace_root: Optional[str] = None,
        workspace_prefix: Optional[str] = None,
        delete_enabled: Optional[bool] = None,
        deps_enabled: Optional[bool] = None,
        backup_suffix: Optional[str] = None,
        log_level: Optional[str] = None,
        load_env: bool = True,
    ):
        self.env_source: str = load_environment() if load_env else "disabled"

        root = workspace_root or self._get_env("ENGINE_WORKSPACE_ROOT", "workspace")
        self.workspace_root: str = self._resolve_root(root)
        self.workspace_prefix: str = (
            workspace_prefix
            if workspace_prefix is not None
            else self._get_env("ENGINE_WORKSPACE_PREFIX", "workspace")
        )
        self.delete_enabled: bool = (
            delete_enabled
            if delete_enabled is not None
            else self._get_flag("ENGINE_DELETE_ENABLED", True)
        )
        self.deps_enabled: bool = (
            deps_enabled
            if deps_enabled is not None
            else self._get_flag("ENGINE_DEPS_ENABLED", False)
        )
        self.backup_suffix: str = backup_suffix or self._get_env(
            "ENGINE_BACKUP_SUFFIX", ".bak"
        )
        self.log_level: str = (
            log_level or self._get_env("ENGINE_LOG_LEVEL", "INFO")
        ).upper()

        if not self.backup_suffix or "/" in self.backup_suffix:
            raise ConfigurationError(f"Invalid backup suffix: {self.backup_suffix!r}")

    def _resolve_root(self, root: str) -> str:
        """Make the workspace root absolute and check it is a directory."""
        path = os.path.realpath(os.path.abspath(os.path.expanduser(root)))
        if not os.path.isdir(path):
            raise ConfigurationError(f"Workspace root is not a directory: {path}")
        return path

    def _get_env(self, key: str, default: str) -> str:
        """Get an environment variable with a default value."""
        return os.getenv(key, default)

    def _get_flag(self, key: str, default: bool) -> bool:
        """Get a boolean environment variable ('0', 'false', 'no' are false)."""
        value = os.getenv(key)
        if value is None or not value.strip():
            return default
        return value.strip().lower() not in ("0", "false", "no", "off")

    def describe(self) -> dict[str, object]:
        """Health summary of the active configuration."""
        return {
            "delete_enabled": self.delete_enabled,
            "deps_enabled": self.deps_enabled,
            "download_enabled": False,
            "env": {"source": self.env_source},
            "workspace_root": self.workspace_root,
            "limits": {
                "max_write_bytes": self.max_write_bytes,
                "max_changed_lines": self.max_changed_lines,
                "view_default_lines": self.view_default_lines,
                "view_max_chars": self.view_max_chars,
            },
        }

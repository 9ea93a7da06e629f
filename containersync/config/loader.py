"""Configuration file loader."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..errors import ConfigurationError
from .models import SyncConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Load containersync configuration."""

    CONFIG_FILENAME = "containersync.yaml"
    USER_CONFIG_DIR = Path.home() / ".containersync"

    def __init__(self, project_path: Path | None = None):
        """Initialize config loader.

        Args:
            project_path: Project directory or config file path. If None, uses
                current directory.
        """
        self._project_path = project_path or Path.cwd()

    def get_config_path(self) -> Path | None:
        """Find config file (explicit file, project-level, then user-level).

        Returns:
            Path to config file if found, None otherwise.
        """
        if self._project_path.is_file():
            return self._project_path

        project_config = self._project_path / self.CONFIG_FILENAME
        if project_config.exists():
            return project_config

        user_config = self.USER_CONFIG_DIR / self.CONFIG_FILENAME
        if user_config.exists():
            return user_config

        return None

    def load(self) -> SyncConfig:
        """Load configuration, returning defaults if no config exists.

        Returns:
            SyncConfig with loaded or default values.

        Raises:
            ConfigurationError: If a config file exists but is invalid.
        """
        config_path = self.get_config_path()
        if config_path is None:
            logger.debug("No config file found, using defaults")
            return SyncConfig()

        try:
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError("Error reading configuration", config_path, e) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Error reading configuration", config_path, "expected a mapping"
            )

        # Allow the remote pattern at top level for short configs
        if "gitRemoteUriPattern" in data:
            settings = dict(data.get("settings") or {})
            settings.setdefault("gitRemoteUriPattern", data.pop("gitRemoteUriPattern"))
            data["settings"] = settings

        try:
            config = SyncConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError("Invalid configuration", config_path, e) from e

        logger.info(f"Loaded config from: {config_path}")
        return config


def load_config(project_path: Path | str | None = None) -> SyncConfig:
    """Load configuration from project or user directory.

    Convenience function that creates a ConfigLoader and loads config.

    Args:
        project_path: Project directory or config file path. If None, uses
            current directory.

    Returns:
        SyncConfig with loaded or default values.
    """
    path = Path(project_path) if project_path else None
    return ConfigLoader(path).load()

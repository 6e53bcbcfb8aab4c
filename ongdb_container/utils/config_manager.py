"""Configuration management utilities."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..core.constants import CONFIG_FILE_NAME, ENV_IMAGE, ENV_PASSWORD, ENV_STARTUP_TIMEOUT
from ..models.container import ContainerSettings
from ..services.exceptions import ConfigError

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages stored container settings."""

    def __init__(self, data_dir: Path):
        """Initialize config manager."""
        self.data_dir = Path(data_dir)
        self.config_file = self.data_dir / CONFIG_FILE_NAME

    def load_stored_settings(self) -> Optional[ContainerSettings]:
        """Load settings from the config file, if there is one.

        Raises:
            ConfigError: If the file is not valid JSON or not valid settings
        """
        if not self.config_file.exists():
            return None
        try:
            data = json.loads(self.config_file.read_text())
            return ContainerSettings(**data)
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            raise ConfigError(f"Invalid settings in {self.config_file}: {e}") from e

    def load_settings(self) -> ContainerSettings:
        """Stored settings with environment overrides applied."""
        settings = self.load_stored_settings() or ContainerSettings()
        overrides = {}

        if ENV_IMAGE in os.environ:
            overrides['image'] = os.environ[ENV_IMAGE]
        if ENV_PASSWORD in os.environ:
            overrides['admin_password'] = os.environ[ENV_PASSWORD] or None
        if ENV_STARTUP_TIMEOUT in os.environ:
            overrides['startup_timeout'] = os.environ[ENV_STARTUP_TIMEOUT]

        if not overrides:
            return settings
        logger.debug(f"Applying environment overrides: {sorted(overrides)}")
        try:
            return ContainerSettings(**{**settings.model_dump(), **overrides})
        except ValidationError as e:
            raise ConfigError(f"Invalid settings in environment: {e}") from e

    def save_settings(self, settings: ContainerSettings):
        """Save settings to the config file."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(settings.model_dump_json(indent=2))

    def set_config_value(self, key: str, value: str) -> ContainerSettings:
        """Store a neo4j.conf property in the settings file."""
        settings = self.load_stored_settings() or ContainerSettings()
        settings.config[key] = value
        self.save_settings(settings)
        return settings

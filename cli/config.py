"""Configuration management for the FileSlicer CLI."""

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError, field_validator

from common.constants import AUTO_REBUILD_FILENAME, COPY_BUFFER_SIZE, DEFAULT_UNIT, UNIT_MULTIPLIERS
from common.logging_config import get_logger

logger = get_logger(__name__)

CONFIG_ENV_VAR = "FILESLICER_CONFIG"


class SlicerSettings(BaseModel):
    """Validated CLI settings."""
    default_unit: str = DEFAULT_UNIT
    buffer_size: int = COPY_BUFFER_SIZE
    auto_rebuild_name: str = AUTO_REBUILD_FILENAME
    cleanup_after_auto_rebuild: bool = True
    remove_self_after_auto_rebuild: bool = False

    @field_validator("default_unit")
    @classmethod
    def _known_unit(cls, value: str) -> str:
        value = value.lower()
        if value not in UNIT_MULTIPLIERS:
            raise ValueError(f"unknown unit {value!r}")
        return value

    @field_validator("buffer_size")
    @classmethod
    def _positive_buffer(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("buffer_size must be positive")
        return value

    @field_validator("auto_rebuild_name")
    @classmethod
    def _plain_file_name(cls, value: str) -> str:
        if not value or Path(value).name != value:
            raise ValueError("auto_rebuild_name must be a plain file name")
        return value


def default_config_path() -> Path:
    """Config location: $FILESLICER_CONFIG or ~/.fileslicer/config.json."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / '.fileslicer' / 'config.json'


class Config:
    """Manages CLI configuration stored in JSON file."""

    DEFAULT_CONFIG = SlicerSettings().model_dump()

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (defaults to default_config_path())
        """
        self.config_path = Path(config_path) if config_path else default_config_path()
        self.settings = self._load()

    @property
    def data(self) -> dict:
        """Current settings as a plain dictionary."""
        return self.settings.model_dump()

    def _load(self) -> SlicerSettings:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Validated settings
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            self.config_path = Path(tempfile.gettempdir()) / '.fileslicer' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.config_path.exists():
            settings = SlicerSettings()
            self._write(settings)
            return settings

        try:
            with open(self.config_path, 'r') as f:
                data = json.load(f)
            return SlicerSettings(**{**self.DEFAULT_CONFIG, **data})
        except (json.JSONDecodeError, TypeError, ValidationError, OSError) as e:
            logger.warning(f"Invalid config file {self.config_path}, using defaults: {e}")
            backup_path = self.config_path.with_suffix('.json.bak')
            try:
                shutil.copy(self.config_path, backup_path)
            except OSError as copy_error:
                logger.warning(f"Cannot back up config file to {backup_path}: {copy_error}")
            return SlicerSettings()

    def _write(self, settings: SlicerSettings) -> None:
        try:
            with open(self.config_path, 'w') as f:
                json.dump(settings.model_dump(), f, indent=2)
        except OSError as e:
            logger.warning(f"Cannot write config file {self.config_path}: {e}")

    def save(self) -> None:
        """Save current configuration to file."""
        self._write(self.settings)

    def update(self, **changes) -> None:
        """
        Validate and apply setting changes, then save.

        Raises:
            pydantic.ValidationError: If a value is invalid
        """
        self.settings = SlicerSettings(**{**self.data, **changes})
        self.save()

    def get_default_unit(self) -> str:
        """Unit applied when a slice command gives no unit token."""
        return self.settings.default_unit

    def get_buffer_size(self) -> int:
        """Working buffer size for rebuilds, in bytes."""
        return self.settings.buffer_size

    def get_auto_rebuild_name(self) -> str:
        """File name produced by auto-rebuild in the current directory."""
        return self.settings.auto_rebuild_name

    def get_cleanup_config(self) -> dict:
        """
        Get auto-rebuild cleanup configuration.

        Returns:
            Dictionary with 'delete_parts' and 'remove_self'
        """
        return {
            'delete_parts': self.settings.cleanup_after_auto_rebuild,
            'remove_self': self.settings.remove_self_after_auto_rebuild,
        }

"""
Configuration repository for loading and saving config files.

This module provides the infrastructure layer for configuration persistence.
It handles file I/O and hands raw data to the pydantic domain models.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from venueaudit.domain.catalog import DEFAULT_CHECKPOINTS, CheckpointCatalog
from venueaudit.domain.config import AppSettings, CheckpointSpec

logger = logging.getLogger(__name__)

SETTINGS_FILE = "venueaudit"


class ConfigRepository:
    """
    Repository for configuration file operations.

    Loads ``venueaudit.json`` settings and the optional catalog override.
    """

    def __init__(self, config_dir: Path):
        """
        Initialize the config repository.

        Args:
            config_dir: Base directory for configuration files
        """
        self.config_dir = Path(config_dir)

    def load_json_file(self, filename: str) -> Any:
        """
        Load a JSON file from the config directory.

        Args:
            filename: Name of the file to load, with or without ``.json``

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file cannot be parsed
        """
        name = filename if filename.endswith(".json") else f"{filename}.json"
        json_path = self.config_dir / name
        if not json_path.exists():
            raise FileNotFoundError(f"Config file '{name}' not found in {self.config_dir}")

        try:
            with open(json_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {json_path}: {e}") from e

    def save_json_file(self, filename: str, data: Any) -> Path:
        """Save data to a JSON file in the config directory."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        name = filename if filename.endswith(".json") else f"{filename}.json"
        filepath = self.config_dir / name
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(json.dumps(data, indent=2, ensure_ascii=False))

        logger.info("Saved config file: %s", filepath)
        return filepath

    def load_settings(self) -> AppSettings:
        """
        Load application settings, falling back to defaults if absent.

        Raises:
            ValueError: If the settings file exists but is invalid
        """
        try:
            data = self.load_json_file(SETTINGS_FILE)
        except FileNotFoundError:
            logger.debug("No settings file in %s, using defaults", self.config_dir)
            return AppSettings()

        try:
            return AppSettings(**data)
        except (PydanticValidationError, TypeError) as e:
            logger.error("Failed to load settings: %s", e)
            raise ValueError(f"Invalid settings: {e}") from e

    def load_catalog(self, settings: AppSettings) -> CheckpointCatalog:
        """
        Build the checkpoint catalog.

        Uses the override file named by ``settings.catalog_file`` when set,
        otherwise the built-in catalog.

        Raises:
            ValueError: If the override file is missing entries or invalid
        """
        if not settings.catalog_file:
            return CheckpointCatalog(DEFAULT_CHECKPOINTS)

        data = self.load_json_file(settings.catalog_file)
        if not isinstance(data, list) or not data:
            raise ValueError(f"Catalog file {settings.catalog_file} must hold a non-empty JSON array")

        try:
            specs = [CheckpointSpec(**entry) for entry in data]
        except (PydanticValidationError, TypeError) as e:
            raise ValueError(f"Invalid catalog entry in {settings.catalog_file}: {e}") from e

        catalog = CheckpointCatalog(
            spec.to_checkpoint(settings.default_due_offset_days) for spec in specs
        )
        logger.info("Loaded %d checkpoints from %s", len(catalog), settings.catalog_file)
        return catalog

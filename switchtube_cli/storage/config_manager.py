"""
Manages loading, validation, and migration of the INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from switchtube_cli.exceptions import ConfigurationError
from switchtube_cli.models.config import (
    DEFAULT_BASE_URL,
    DEFAULT_CHUNK_SIZE,
    DownloadConfig,
)

log = logging.getLogger(__name__)

DEFAULTS: dict[str, Any] = {
    "token": "",
    "base_url": DEFAULT_BASE_URL,
    "output_dir": ".",
    "show_progress": True,
    "chunk_size": DEFAULT_CHUNK_SIZE,
}


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(self, cli_options: dict[str, Any] | None = None) -> DownloadConfig:
        """
        Loads configuration from the INI file, applies CLI overrides, and validates it.

        A missing config file is not an error; defaults are used instead, so a
        token passed on the command line is enough to run.

        Args:
            cli_options: A dictionary of options provided via the command line.

        Returns:
            A validated DownloadConfig object.

        Raises:
            ConfigurationError: If the config file is unreadable or validation fails.
        """
        if self.config_file_path.is_file():
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigurationError(
                    f"Error parsing configuration file: {e}"
                ) from e

            if self._migrate_if_needed():
                log.info(
                    "[yellow]Configuration file was updated with new default values."
                    "[/yellow]"
                )
            config_data = self._get_config_as_dict()
        else:
            log.debug(f"No config file at '{self.config_file_path}', using defaults.")
            config_data = dict(DEFAULTS)

        if cli_options:
            config_data.update(cli_options)

        try:
            config_dir = self.config_file_path.parent
            return DownloadConfig(**config_data, config_path=str(config_dir))
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def save_new_config(self, settings: dict[str, Any]) -> None:
        """
        Creates and saves a new configuration file.

        Args:
            settings: A dictionary of settings to save; missing keys get defaults.
        """
        config = configparser.ConfigParser(interpolation=None)
        config["DEFAULT"] = {}

        for key in DownloadConfig.get_ini_keys():
            value = settings.get(key, DEFAULTS.get(key))
            if isinstance(value, bool):
                config["DEFAULT"][key] = "true" if value else "false"
            elif value is not None:
                config["DEFAULT"][key] = str(value)

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                config.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the 'DEFAULT' section of the INI file into a dictionary."""
        section = self._parser["DEFAULT"]
        try:
            return {
                "token": section.get("token", DEFAULTS["token"]),
                "base_url": section.get("base_url", DEFAULTS["base_url"]),
                "output_dir": section.get("output_dir", DEFAULTS["output_dir"]),
                "show_progress": section.getboolean(
                    "show_progress", DEFAULTS["show_progress"]
                ),
                "chunk_size": section.getint("chunk_size", DEFAULTS["chunk_size"]),
            }
        except ValueError as e:
            raise ConfigurationError(f"Invalid value in configuration file: {e}") from e

    def _migrate_if_needed(self) -> bool:
        """Adds missing default values to an existing config file."""
        needs_saving = False
        config_section = self._parser["DEFAULT"]

        for key in DownloadConfig.get_ini_keys():
            if key not in config_section:
                default_value = DEFAULTS[key]
                if isinstance(default_value, bool):
                    config_section[key] = "true" if default_value else "false"
                else:
                    config_section[key] = str(default_value)

                needs_saving = True
                log.debug(
                    f"Migrating config: added missing key '{key}' with "
                    f"value '{config_section[key]}'."
                )

        if needs_saving:
            try:
                with open(self.config_file_path, "w", encoding="utf-8") as f:
                    self._parser.write(f)
            except OSError as e:
                log.error(f"Could not save migrated configuration file: {e}")
                return False

        return needs_saving

    def get_config_as_dict(self) -> dict[str, Any]:
        """Returns the raw file values, or the defaults when no file exists."""
        if not self.config_file_path.is_file():
            return dict(DEFAULTS)
        self._parser.read(self.config_file_path, encoding="utf-8")
        return self._get_config_as_dict()

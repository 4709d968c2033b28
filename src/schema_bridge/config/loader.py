"""Settings Loader for loading converter settings from YAML files."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from schema_bridge.config.base import ConverterSettings
from schema_bridge.errors import ConfigError


class SettingsLoader:
    """Loads converter settings from YAML files."""

    def load_file(self, path: Path | str) -> ConverterSettings:
        """Load settings from a YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            Loaded ConverterSettings instance

        Raises:
            ConfigError: If the file is missing or invalid
        """
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Settings file not found: {path}")

        with open(path) as f:
            return self.load_from_string(f.read())

    def load_from_string(self, content: str) -> ConverterSettings:
        """Load settings from a YAML string.

        Args:
            content: YAML content as string

        Returns:
            Loaded ConverterSettings instance
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid settings YAML: {e}") from e

        return self._parse_settings(data)

    def _parse_settings(self, data: Any) -> ConverterSettings:
        """Parse settings data from YAML structure."""
        if data is None:
            return ConverterSettings()
        if not isinstance(data, dict):
            raise ConfigError("Settings must be a mapping")

        try:
            return ConverterSettings(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings: {e}") from e

    def save_file(self, settings: ConverterSettings, path: Path | str) -> None:
        """Save settings to a YAML file.

        Args:
            settings: The settings to save
            path: Path for the output file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(settings.model_dump(), f, default_flow_style=False, sort_keys=False)


def load_settings(path: Path | str) -> ConverterSettings:
    """Convenience function to load settings from a file.

    Args:
        path: Path to the YAML file

    Returns:
        Loaded ConverterSettings instance
    """
    loader = SettingsLoader()
    return loader.load_file(path)

"""Converter settings and their YAML loader."""

from schema_bridge.config.base import ConverterSettings
from schema_bridge.config.loader import SettingsLoader, load_settings

__all__ = [
    "ConverterSettings",
    "SettingsLoader",
    "load_settings",
]

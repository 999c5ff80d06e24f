"""Config – env-based settings."""
from listing_catalog.config.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from listing_catalog.config.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from listing_catalog.config.settings import Settings

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]

"""Config – 12-factor settings and loaders."""

from chronojob.config.settings import EnvSettingsLoader, Settings, SettingsLoader
from chronojob.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]

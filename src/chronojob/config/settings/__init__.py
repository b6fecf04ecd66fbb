"""Config settings – 12-factor env-based configuration."""
from chronojob.config.settings.base import Settings
from chronojob.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "Settings", "SettingsLoader"]

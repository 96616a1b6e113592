"""Settings storage with encryption of sensitive values."""

from .settings_manager import SettingsManager, get_settings

__all__ = ["SettingsManager", "get_settings"]

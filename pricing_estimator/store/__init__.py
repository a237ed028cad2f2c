"""Configuration Store and the settings editor that feeds it."""

from pricing_estimator.store.config_store import ConfigurationStore
from pricing_estimator.store.settings_editor import SettingsEditor

__all__ = ["ConfigurationStore", "SettingsEditor"]

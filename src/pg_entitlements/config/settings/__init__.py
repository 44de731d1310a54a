"""Config settings – 12-factor env-based configuration."""
from pg_entitlements.config.settings.base import Settings
from pg_entitlements.config.settings.connector import ConnectorSettings
from pg_entitlements.config.settings.factory import SettingsFactory
from pg_entitlements.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "ConnectorSettings",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]

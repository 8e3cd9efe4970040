"""Cached, observable access to per-user display and language settings."""

from __future__ import annotations

from app_settings.clients import (
    InMemorySettingsClient,
    SettingsClient,
    SettingsClientError,
    SqlSettingsClient,
)
from app_settings.observable import CachedValue, Subscription, ValueNotSetError
from app_settings.repositories import AppSettingsRepository
from app_settings.schemas import (
    AppAccentTheme,
    AppBaseTheme,
    AppLanguage,
    DisplaySettings,
)

__version__ = "0.1.0"

__all__ = [
    "AppAccentTheme",
    "AppBaseTheme",
    "AppLanguage",
    "AppSettingsRepository",
    "CachedValue",
    "DisplaySettings",
    "InMemorySettingsClient",
    "SettingsClient",
    "SettingsClientError",
    "SqlSettingsClient",
    "Subscription",
    "ValueNotSetError",
]

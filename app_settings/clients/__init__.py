"""Settings store clients."""

from __future__ import annotations

from app_settings.clients.base import SettingsClient, SettingsClientError
from app_settings.clients.memory import InMemorySettingsClient
from app_settings.clients.sql import SqlSettingsClient

__all__ = [
    "SettingsClient",
    "SettingsClientError",
    "InMemorySettingsClient",
    "SqlSettingsClient",
]

"""Repositories package - cached access to user preferences."""

from __future__ import annotations

from app_settings.repositories.settings_repository import AppSettingsRepository

__all__ = ["AppSettingsRepository"]

"""In-process settings client."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from app_settings.schemas import AppLanguage, DisplaySettings, validate_language

logger = logging.getLogger(__name__)


@dataclass
class _UserRecord:
    display_settings: Optional[DisplaySettings] = None
    language: Optional[AppLanguage] = None


class InMemorySettingsClient:
    """Settings client that keeps preferences in a dictionary.

    Users without stored values (including users whose settings were
    cleared) get the provider defaults.
    """

    def __init__(self, default_language: AppLanguage = "en") -> None:
        self.default_language = validate_language(default_language)
        self._records: Dict[str, _UserRecord] = {}

    async def get_display_settings(self, *, user_id: str) -> DisplaySettings:
        record = self._records.get(user_id)
        if record is None or record.display_settings is None:
            return DisplaySettings()
        return record.display_settings

    async def set_display_settings(
        self, *, user_id: str, settings: DisplaySettings
    ) -> None:
        if not isinstance(settings, DisplaySettings):
            settings = DisplaySettings.model_validate(settings)
        self._records.setdefault(user_id, _UserRecord()).display_settings = settings
        logger.debug(f"Stored display settings for user {user_id}")

    async def get_language(self, *, user_id: str) -> AppLanguage:
        record = self._records.get(user_id)
        if record is None or record.language is None:
            return self.default_language
        return record.language

    async def set_language(self, *, user_id: str, language: AppLanguage) -> None:
        language = validate_language(language)
        self._records.setdefault(user_id, _UserRecord()).language = language
        logger.debug(f"Stored language '{language}' for user {user_id}")

    async def clear_settings(self, *, user_id: str) -> None:
        self._records.pop(user_id, None)
        logger.info(f"Cleared settings for user {user_id}")

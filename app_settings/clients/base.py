"""Contract for the asynchronous settings store used by the repository."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from app_settings.schemas import AppLanguage, DisplaySettings


class SettingsClientError(Exception):
    """Raised by settings clients when the underlying store fails."""


@runtime_checkable
class SettingsClient(Protocol):
    """Protocol describing a per-user settings store.

    Every operation is scoped by ``user_id``, may suspend, and may raise.
    """

    async def get_display_settings(self, *, user_id: str) -> DisplaySettings: ...

    async def set_display_settings(
        self, *, user_id: str, settings: DisplaySettings
    ) -> None: ...

    async def get_language(self, *, user_id: str) -> AppLanguage: ...

    async def set_language(self, *, user_id: str, language: AppLanguage) -> None: ...

    async def clear_settings(self, *, user_id: str) -> None: ...

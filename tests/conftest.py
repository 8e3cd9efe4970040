"""Shared fixtures for the settings repository tests."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Tuple

import pytest
import pytest_asyncio

from app_settings.core import get_settings
from app_settings.repositories import AppSettingsRepository
from app_settings.schemas import AppLanguage, DisplaySettings

USER_ID = "user-123"


class FakeSettingsClient:
    """Scriptable settings client that records every call.

    ``errors`` maps an operation name to the exception it should raise and
    ``gates`` maps an operation name to an ``asyncio.Event`` the call waits
    on before completing.
    """

    def __init__(
        self,
        display_settings: Optional[DisplaySettings] = None,
        language: Optional[AppLanguage] = "en",
    ) -> None:
        self.display_settings = display_settings or DisplaySettings()
        self.language = language
        self.errors: Dict[str, Exception] = {}
        self.gates: Dict[str, asyncio.Event] = {}
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def count(self, operation: str) -> int:
        return sum(1 for name, _ in self.calls if name == operation)

    async def _call(self, operation: str, **kwargs: Any) -> None:
        self.calls.append((operation, kwargs))
        gate = self.gates.get(operation)
        if gate is not None:
            await gate.wait()
        error = self.errors.get(operation)
        if error is not None:
            raise error

    async def get_display_settings(self, *, user_id: str) -> DisplaySettings:
        await self._call("get_display_settings", user_id=user_id)
        return self.display_settings

    async def set_display_settings(
        self, *, user_id: str, settings: DisplaySettings
    ) -> None:
        await self._call("set_display_settings", user_id=user_id, settings=settings)
        self.display_settings = settings

    async def get_language(self, *, user_id: str) -> AppLanguage:
        await self._call("get_language", user_id=user_id)
        return self.language

    async def set_language(self, *, user_id: str, language: AppLanguage) -> None:
        await self._call("set_language", user_id=user_id, language=language)
        self.language = language

    async def clear_settings(self, *, user_id: str) -> None:
        await self._call("clear_settings", user_id=user_id)


@pytest.fixture
def client() -> FakeSettingsClient:
    return FakeSettingsClient()


@pytest_asyncio.fixture
async def repository(client: FakeSettingsClient):
    repo = AppSettingsRepository(client=client, user_id=USER_ID)
    await repo.wait_until_ready()
    yield repo
    repo.dispose()


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

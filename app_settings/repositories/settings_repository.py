"""Repository exposing cached, observable user preferences."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Tuple, TypeVar

from app_settings.clients.base import SettingsClient
from app_settings.observable import CachedValue
from app_settings.schemas import AppLanguage, DisplaySettings

logger = logging.getLogger(__name__)

ValueType = TypeVar("ValueType")


class AppSettingsRepository:
    """Keeps a user's display settings and language in sync with a client.

    Construction schedules a best-effort initial load on the running event
    loop and returns immediately. Explicit ``get_*``, ``set_*`` and
    ``clear_settings`` calls go straight to the client; failures propagate
    and leave the cached values as they were.
    """

    def __init__(self, client: SettingsClient, user_id: str) -> None:
        """Initialize the repository.

        Must be called while an event loop is running.

        Args:
            client: Store handling the actual persistence
            user_id: Identifier all client calls are scoped to
        """
        self._client = client
        self._user_id = user_id

        self._display_settings: CachedValue[DisplaySettings] = CachedValue(
            "display_settings", seed=DisplaySettings()
        )
        self._language: CachedValue[AppLanguage] = CachedValue("language")

        self._initial_load = asyncio.get_running_loop().create_task(
            self._load_from_client(),
            name=f"app-settings-initial-load-{user_id}",
        )

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def is_disposed(self) -> bool:
        return self._display_settings.is_closed and self._language.is_closed

    def watch_display_settings(self) -> CachedValue[DisplaySettings]:
        """Observable display settings; new subscribers get the current value."""
        return self._display_settings

    def watch_language(self) -> CachedValue[AppLanguage]:
        """Observable language; nothing is replayed until a value exists."""
        return self._language

    @property
    def current_display_settings(self) -> DisplaySettings:
        return self._display_settings.value

    @property
    def current_language(self) -> AppLanguage:
        """Latest language.

        Raises:
            ValueNotSetError: If no language has been loaded or set yet
        """
        return self._language.value

    async def wait_until_ready(self) -> None:
        """Wait for the construction-time load to finish. Never raises."""
        await asyncio.shield(self._initial_load)

    async def _load_from_client(self) -> None:
        ok, settings = await self._attempt(
            "display settings", self._client.get_display_settings
        )
        if ok:
            self._publish(self._display_settings, settings)

        ok, language = await self._attempt("language", self._client.get_language)
        if ok:
            self._publish(self._language, language)

    async def _attempt(
        self, label: str, fetch: Callable[..., Awaitable[ValueType]]
    ) -> Tuple[bool, Optional[ValueType]]:
        try:
            return True, await fetch(user_id=self._user_id)
        except Exception as e:
            logger.warning(
                f"Could not load {label} for user {self._user_id}, "
                f"keeping cached value: {e}"
            )
            return False, None

    def _publish(self, cached: CachedValue[Any], value: Any) -> None:
        if cached.is_closed:
            logger.debug(
                f"Repository for user {self._user_id} disposed, "
                f"dropping {cached.name} update"
            )
            return
        cached.publish(value)

    async def get_display_settings(self) -> DisplaySettings:
        """Fetch display settings from the client and update the cache.

        Prefer ``watch_display_settings`` or ``current_display_settings``
        for the cached value.
        """
        settings = await self._client.get_display_settings(user_id=self._user_id)
        self._publish(self._display_settings, settings)
        return settings

    async def set_display_settings(self, settings: DisplaySettings) -> None:
        """Save display settings through the client, then publish them."""
        await self._client.set_display_settings(
            user_id=self._user_id, settings=settings
        )
        self._publish(self._display_settings, settings)

    async def get_language(self) -> AppLanguage:
        """Fetch the language from the client and update the cache."""
        language = await self._client.get_language(user_id=self._user_id)
        self._publish(self._language, language)
        return language

    async def set_language(self, language: AppLanguage) -> None:
        """Save the language through the client, then publish it."""
        await self._client.set_language(user_id=self._user_id, language=language)
        self._publish(self._language, language)

    async def clear_settings(self) -> None:
        """Clear stored settings and reload whatever the client now returns."""
        await self._client.clear_settings(user_id=self._user_id)
        logger.info(f"Settings cleared for user {self._user_id}, reloading")
        await self._load_from_client()

    def dispose(self) -> None:
        """Close both cached values. Safe to call more than once.

        Client calls already in flight still complete, but their results
        are no longer published.
        """
        if self.is_disposed:
            return
        self._display_settings.close()
        self._language.close()
        logger.debug(f"Settings repository for user {self._user_id} disposed")

    async def __aenter__(self) -> "AppSettingsRepository":
        await self.wait_until_ready()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

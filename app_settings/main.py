"""Factories wiring configuration, clients and the repository together."""

from __future__ import annotations

from typing import Optional

from app_settings.clients import (
    InMemorySettingsClient,
    SettingsClient,
    SqlSettingsClient,
)
from app_settings.core import get_settings
from app_settings.core.settings import ServiceSettings
from app_settings.repositories import AppSettingsRepository


class UnknownClientError(ValueError):
    """Raised when the configured client backend is not supported."""


def build_client(settings: Optional[ServiceSettings] = None) -> SettingsClient:
    """Create the settings client selected by configuration.

    Args:
        settings: Service settings (defaults to the cached environment settings)

    Returns:
        A ready-to-use settings client

    Raises:
        UnknownClientError: If the configured backend is not supported
    """
    settings = settings or get_settings()

    if settings.client_backend == "memory":
        return InMemorySettingsClient(default_language=settings.default_language)
    if settings.client_backend == "sql":
        return SqlSettingsClient.from_uri(
            settings.sqlalchemy_database_uri,
            default_language=settings.default_language,
            echo=settings.sqlalchemy_echo,
        )
    raise UnknownClientError(f"Unknown settings client '{settings.client_backend}'")


def create_repository(
    user_id: str,
    client: Optional[SettingsClient] = None,
    settings: Optional[ServiceSettings] = None,
) -> AppSettingsRepository:
    """Create a settings repository for ``user_id``.

    Must be called from within a running event loop; the initial load is
    scheduled on it.
    """
    if not user_id or user_id.strip() == "":
        raise ValueError("User id cannot be empty")
    if client is None:
        client = build_client(settings)
    return AppSettingsRepository(client=client, user_id=user_id)

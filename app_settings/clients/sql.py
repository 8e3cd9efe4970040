"""SQLAlchemy-backed settings client."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, TypeVar

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app_settings.clients.base import SettingsClientError
from app_settings.models import Base, UserPreferences
from app_settings.schemas import AppLanguage, DisplaySettings, validate_language

logger = logging.getLogger(__name__)

ResultType = TypeVar("ResultType")


class SqlSettingsClient:
    """Settings client persisting one ``UserPreferences`` row per user.

    Blocking session work runs in a worker thread so the event loop is never
    held up. Database failures surface as :class:`SettingsClientError`.
    """

    def __init__(
        self,
        engine: Engine,
        default_language: AppLanguage = "en",
    ) -> None:
        """Initialize the client.

        Args:
            engine: SQLAlchemy engine for the preferences database
            default_language: Language returned for users with none stored
        """
        self.engine = engine
        self.default_language = validate_language(default_language)
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @classmethod
    def from_uri(
        cls,
        uri: str,
        default_language: AppLanguage = "en",
        echo: bool = False,
    ) -> "SqlSettingsClient":
        """Create a client (and its schema) from a database URI."""
        url = make_url(uri)
        engine_options: dict = {"echo": echo}
        if url.get_backend_name() == "sqlite":
            # Sessions run on worker threads
            engine_options["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                # One shared connection, or each thread sees its own empty database
                engine_options["poolclass"] = StaticPool
        engine = create_engine(url, **engine_options)
        client = cls(engine, default_language=default_language)
        client.create_schema()
        return client

    def create_schema(self) -> None:
        """Create the preferences table if it does not exist."""
        Base.metadata.create_all(self.engine)

    async def get_display_settings(self, *, user_id: str) -> DisplaySettings:
        def load(session: Session) -> DisplaySettings:
            record = session.get(UserPreferences, user_id)
            if record is None:
                return DisplaySettings()
            return record.to_display_settings()

        return await self._run("get display settings", load)

    async def set_display_settings(
        self, *, user_id: str, settings: DisplaySettings
    ) -> None:
        if not isinstance(settings, DisplaySettings):
            settings = DisplaySettings.model_validate(settings)

        def store(session: Session) -> None:
            record = self._get_or_create(session, user_id)
            record.base_theme = settings.base_theme
            record.accent_theme = settings.accent_theme
            session.commit()

        await self._run("set display settings", store)

    async def get_language(self, *, user_id: str) -> AppLanguage:
        def load(session: Session) -> AppLanguage:
            record = session.get(UserPreferences, user_id)
            if record is None or not record.language:
                return self.default_language
            return record.language

        return await self._run("get language", load)

    async def set_language(self, *, user_id: str, language: AppLanguage) -> None:
        language = validate_language(language)

        def store(session: Session) -> None:
            record = self._get_or_create(session, user_id)
            record.language = language
            session.commit()

        await self._run("set language", store)

    async def clear_settings(self, *, user_id: str) -> None:
        def delete(session: Session) -> None:
            record = session.get(UserPreferences, user_id)
            if record is not None:
                session.delete(record)
                session.commit()

        await self._run("clear settings", delete)
        logger.info(f"Cleared settings for user {user_id}")

    @staticmethod
    def _get_or_create(session: Session, user_id: str) -> UserPreferences:
        record = session.get(UserPreferences, user_id)
        if record is None:
            record = UserPreferences(user_id=user_id)
            session.add(record)
        return record

    async def _run(
        self, operation: str, work: Callable[[Session], ResultType]
    ) -> ResultType:
        return await asyncio.to_thread(self._run_sync, operation, work)

    def _run_sync(
        self, operation: str, work: Callable[[Session], ResultType]
    ) -> ResultType:
        session: Optional[Session] = None
        try:
            session = self._session_factory()
            return work(session)
        except SQLAlchemyError as exc:
            if session is not None:
                session.rollback()
            logger.error(f"Failed to {operation}: {exc}")
            raise SettingsClientError(f"Failed to {operation}") from exc
        finally:
            if session is not None:
                session.close()

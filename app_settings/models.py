"""Database models for persisted user preferences."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import declarative_base

from app_settings.schemas import AppAccentTheme, AppBaseTheme, DisplaySettings

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserPreferences(Base):
    """One row of display and language preferences per user."""

    __tablename__ = "user_preferences"

    user_id = Column(String(128), primary_key=True)
    base_theme = Column(
        SQLEnum(AppBaseTheme), default=AppBaseTheme.SYSTEM, nullable=False
    )
    accent_theme = Column(
        SQLEnum(AppAccentTheme), default=AppAccentTheme.DEFAULT_BLUE, nullable=False
    )
    language = Column(String(35), nullable=True)  # BCP 47 tags fit in 35 chars
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def to_display_settings(self) -> DisplaySettings:
        return DisplaySettings(
            base_theme=self.base_theme or AppBaseTheme.SYSTEM,
            accent_theme=self.accent_theme or AppAccentTheme.DEFAULT_BLUE,
        )

    def __repr__(self) -> str:
        return f"<UserPreferences {self.user_id}>"

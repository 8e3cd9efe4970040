"""Pydantic value objects for user preferences."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field

# Language codes are opaque to this package ("en", "es", "pt-BR", ...).
AppLanguage = str


class AppBaseTheme(str, enum.Enum):
    """Base colour scheme."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"  # Follow the platform setting


class AppAccentTheme(str, enum.Enum):
    """Accent palette applied on top of the base theme."""

    DEFAULT_BLUE = "defaultBlue"
    NEWS_RED = "newsRed"
    GRAPHITE_GRAY = "graphiteGray"


class DisplaySettings(BaseModel):
    """Immutable display preferences.

    ``DisplaySettings()`` is the default used before anything has been
    loaded from a client.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    base_theme: AppBaseTheme = Field(default=AppBaseTheme.SYSTEM, alias="baseTheme")
    accent_theme: AppAccentTheme = Field(
        default=AppAccentTheme.DEFAULT_BLUE, alias="accentTheme"
    )


def validate_language(language: AppLanguage) -> AppLanguage:
    """Return a stripped language code, rejecting blank values.

    Raises:
        ValueError: If the language code is empty
    """
    if not isinstance(language, str) or language.strip() == "":
        raise ValueError("Language cannot be empty")
    return language.strip()

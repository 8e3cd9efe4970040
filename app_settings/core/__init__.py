"""Core package infrastructure (settings, logging)."""

from functools import lru_cache

from dotenv import load_dotenv

from .logging_config import configure_logging
from .settings import BASE_DIR, ServiceSettings


@lru_cache(maxsize=1)
def get_settings() -> ServiceSettings:
    """Return cached service settings.

    Variables from the project's ``.env`` file are loaded into the process
    environment first; values already set in the environment win.
    """
    load_dotenv(BASE_DIR / ".env")
    return ServiceSettings()


__all__ = ["ServiceSettings", "configure_logging", "get_settings"]

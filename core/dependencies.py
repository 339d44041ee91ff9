"""
Process-wide settings shared by routes through FastAPI dependencies.

The lifespan handler in main.py loads them at startup and drops them on
shutdown.
"""

from core.settings import Settings

_settings: Settings | None = None


def get_settings() -> Settings:
    if _settings is None:
        raise RuntimeError("Settings are not loaded; the app lifespan has not started")
    return _settings


def init_settings(settings: Settings | None = None) -> Settings:
    global _settings
    _settings = settings if settings is not None else Settings()
    return _settings


def clear_settings() -> None:
    global _settings
    _settings = None

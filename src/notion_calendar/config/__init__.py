"""Configuration models and helpers."""

from __future__ import annotations

from .settings import (
    AppSettings,
    CalendarSettings,
    NotionSettings,
    PropertySettings,
    ServerSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "CalendarSettings",
    "NotionSettings",
    "PropertySettings",
    "ServerSettings",
    "get_settings",
]

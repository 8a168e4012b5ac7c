from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int
    cors_allow_origins: tuple[str, ...]


@dataclass(frozen=True)
class NotionSettings:
    timeout_ms: Optional[int]
    base_url: Optional[str]
    notion_version: Optional[str]

    def client_options(self) -> dict:
        options: dict = {}
        if self.timeout_ms is not None:
            options["timeout_ms"] = self.timeout_ms
        if self.base_url:
            options["base_url"] = self.base_url
        if self.notion_version:
            options["notion_version"] = self.notion_version
        return options


@dataclass(frozen=True)
class PropertySettings:
    """Names of the database properties the calendar reads and writes."""

    date: str
    completed: str
    priority: str
    category: str
    routine: str
    repeat_days: str


@dataclass(frozen=True)
class CalendarSettings:
    timezone: str


@dataclass(frozen=True)
class AppSettings:
    server: ServerSettings
    notion: NotionSettings
    properties: PropertySettings
    calendar: CalendarSettings


def _int_from_env(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _origins_from_env(name: str) -> tuple[str, ...]:
    raw = os.getenv(name, "*")
    origins = tuple(item.strip() for item in raw.split(",") if item.strip())
    return origins or ("*",)


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    server = ServerSettings(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        cors_allow_origins=_origins_from_env("CORS_ALLOW_ORIGINS"),
    )

    notion = NotionSettings(
        timeout_ms=_int_from_env("NOTION_TIMEOUT_MS"),
        base_url=os.getenv("NOTION_BASE_URL"),
        notion_version=os.getenv("NOTION_VERSION"),
    )

    properties = PropertySettings(
        date=os.getenv("NOTION_PROP_DATE", "Date"),
        completed=os.getenv("NOTION_PROP_COMPLETED", "Completed"),
        priority=os.getenv("NOTION_PROP_PRIORITY", "Priority"),
        category=os.getenv("NOTION_PROP_CATEGORY", "Category"),
        routine=os.getenv("NOTION_PROP_ROUTINE", "Routine"),
        repeat_days=os.getenv("NOTION_PROP_REPEAT_DAYS", "Repeat Days"),
    )

    calendar = CalendarSettings(timezone=os.getenv("CALENDAR_TIMEZONE", "Asia/Seoul"))

    return AppSettings(server=server, notion=notion, properties=properties, calendar=calendar)

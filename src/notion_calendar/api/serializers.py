from __future__ import annotations

from typing import Any, Dict

from ..domain import CalendarEvent, DatabaseSummary
from .models import DatabasePayload, EventPayload


def serialize_database(database: DatabaseSummary) -> Dict[str, Any]:
    return DatabasePayload.from_domain(database).model_dump()


def serialize_event(event: CalendarEvent) -> Dict[str, Any]:
    return EventPayload.from_domain(event).model_dump(by_alias=True)

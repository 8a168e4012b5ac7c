from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from ..config.settings import PropertySettings
from .dates import display_date, parse_repeat_days, split_timestamp
from .properties import extract_title, plain_text, read_checkbox, read_choices, read_date

UNTITLED_DATABASE = "Untitled"


@dataclass(slots=True)
class DatabaseSummary:
    id: str
    title: str

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "DatabaseSummary":
        return cls(id=str(record["id"]), title=plain_text(record.get("title")) or UNTITLED_DATABASE)


@dataclass(slots=True)
class CalendarEvent:
    """Flat projection of one database page, computed fresh on every read."""

    id: str
    title: str
    date: Optional[str]
    original_date: Optional[str]
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_completed: bool = False
    is_priority: bool = False
    category: Optional[str] = None
    is_routine: bool = False
    repeat_days: List[int] = field(default_factory=list)
    url: Optional[str] = None

    @classmethod
    def from_page(cls, page: Dict[str, Any], *, names: PropertySettings, today: date) -> "CalendarEvent":
        properties = page.get("properties") or {}
        date_prop = read_date(properties, names.date) or {}
        stored_date, start_time = split_timestamp(date_prop.get("start"))
        _, end_time = split_timestamp(date_prop.get("end"))
        is_routine = read_checkbox(properties, names.routine)
        repeat_days = parse_repeat_days(read_choices(properties, names.repeat_days))
        categories = read_choices(properties, names.category)
        return cls(
            id=str(page["id"]),
            title=extract_title(properties),
            date=display_date(stored_date, is_routine=is_routine, repeat_days=repeat_days, today=today),
            original_date=stored_date,
            start_time=start_time,
            end_time=end_time,
            is_completed=read_checkbox(properties, names.completed),
            is_priority=read_checkbox(properties, names.priority),
            category=categories[0] if categories else None,
            is_routine=is_routine,
            repeat_days=repeat_days,
            url=page.get("url"),
        )

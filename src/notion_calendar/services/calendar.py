from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from ..domain import CalendarEvent, PropertyKind
from ..domain.dates import combine_timestamp, format_repeat_days, parse_day, shift_timestamp, split_timestamp
from ..domain.properties import (
    checkbox_value,
    choices_value,
    date_value,
    find_title_property,
    property_kind,
    read_checkbox,
    read_date,
    title_value,
)
from ..errors import InvalidRequestError
from .context import NotionSession, ServiceContext

logger = logging.getLogger(__name__)

NO_DATE_MESSAGE = "날짜가 설정되지 않은 일정입니다."
SCHEDULE_FIELDS = frozenset({"date", "start_time", "end_time"})


@dataclass(slots=True)
class CalendarService:
    context: ServiceContext

    def list_events(self, token: str, database_id: str) -> List[CalendarEvent]:
        session = self.context.open(token)
        pages = session.databases.query(
            database_id,
            sorts=[{"property": self.context.names.date, "direction": "ascending"}],
        )
        today = self.context.today()
        return [CalendarEvent.from_page(page, names=self.context.names, today=today) for page in pages]

    def add_event(
        self,
        token: str,
        database_id: str,
        *,
        title: str,
        date: str,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        category: Optional[str] = None,
        is_routine: Optional[bool] = None,
        repeat_days: Optional[Iterable[int]] = None,
    ) -> Dict[str, Any]:
        names = self.context.names
        session = self.context.open(token)
        schema = session.databases.schema(database_id)

        properties: Dict[str, Any] = {
            find_title_property(schema): title_value(title),
            names.date: self._date_property(date, start_time, end_time),
        }
        if category:
            properties[names.category] = self._category_property(schema, category)
        if is_routine is not None:
            properties[names.routine] = checkbox_value(is_routine)
        if repeat_days is not None:
            properties[names.repeat_days] = choices_value(PropertyKind.MULTI_SELECT, format_repeat_days(repeat_days))

        page = session.pages.create(database_id, properties)
        logger.info("Created page %s in database %s", page.get("id"), database_id)
        return page

    def update_event(self, token: str, database_id: str, page_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Write only the fields present in ``changes``; returns the properties sent."""

        names = self.context.names
        session = self.context.open(token)
        properties: Dict[str, Any] = {}

        if "title" in changes or "category" in changes:
            schema = session.databases.schema(database_id)
            if changes.get("title") is not None:
                properties[find_title_property(schema)] = title_value(changes["title"])
            if "category" in changes:
                properties[names.category] = self._category_property(schema, changes["category"])

        if SCHEDULE_FIELDS & changes.keys():
            properties[names.date] = self._resolve_schedule(session, page_id, changes)

        if changes.get("is_routine") is not None:
            properties[names.routine] = checkbox_value(changes["is_routine"])
        if "repeat_days" in changes:
            properties[names.repeat_days] = choices_value(
                PropertyKind.MULTI_SELECT, format_repeat_days(changes["repeat_days"] or ())
            )

        if not properties:
            logger.debug("No changes supplied for page %s", page_id)
            return properties
        session.pages.update_properties(page_id, properties)
        logger.info("Updated %s on page %s", ", ".join(sorted(properties)), page_id)
        return properties

    def delete_event(self, token: str, page_id: str) -> None:
        self.context.open(token).pages.archive(page_id)
        logger.info("Archived page %s", page_id)

    def toggle_priority(self, token: str, page_id: str) -> bool:
        return self._toggle(token, page_id, self.context.names.priority)

    def toggle_completion(self, token: str, page_id: str) -> bool:
        return self._toggle(token, page_id, self.context.names.completed)

    def postpone(self, token: str, page_id: str) -> Dict[str, Optional[str]]:
        names = self.context.names
        session = self.context.open(token)
        page = session.pages.fetch(page_id)
        current = read_date(page.get("properties") or {}, names.date)
        if current is None:
            raise InvalidRequestError(NO_DATE_MESSAGE)

        start = shift_timestamp(current["start"])
        end = shift_timestamp(current["end"]) if current.get("end") else None
        session.pages.update_properties(page_id, {names.date: date_value(start, end, current.get("time_zone"))})
        logger.info("Postponed page %s to %s", page_id, start)
        return {"date": start, "end": end}

    def _toggle(self, token: str, page_id: str, property_name: str) -> bool:
        session = self.context.open(token)
        page = session.pages.fetch(page_id)
        flag = not read_checkbox(page.get("properties") or {}, property_name)
        session.pages.update_properties(page_id, {property_name: checkbox_value(flag)})
        logger.info("Set %s=%s on page %s", property_name, flag, page_id)
        return flag

    def _date_property(self, day: str, start_time: Optional[str], end_time: Optional[str]) -> Dict[str, Any]:
        start = combine_timestamp(day, start_time)
        end = combine_timestamp(day, end_time) if end_time else None
        time_zone = self.context.settings.calendar.timezone if (start_time or end_time) else None
        return date_value(start, end, time_zone)

    def _resolve_schedule(self, session: NotionSession, page_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Merge supplied schedule fields into the stored date value.

        The stored end keeps its own calendar date. A new ``date`` moves the end
        by the same number of days as the start, and an explicit ``end_time``
        of ``None`` drops the end.
        """

        if "date" in changes and changes["date"] is None:
            return {"date": None}

        day = start_time = end_day = end_time = None
        if not changes.get("date") or "start_time" not in changes or "end_time" not in changes:
            page = session.pages.fetch(page_id)
            current = read_date(page.get("properties") or {}, self.context.names.date) or {}
            day, start_time = split_timestamp(current.get("start"))
            end_day, end_time = split_timestamp(current.get("end"))

        if changes.get("date"):
            if day and end_day:
                end_day = shift_timestamp(end_day, (parse_day(changes["date"]) - parse_day(day)).days)
            day = changes["date"]
        if not day:
            raise InvalidRequestError(NO_DATE_MESSAGE)

        if "start_time" in changes:
            start_time = changes["start_time"]
        if "end_time" in changes:
            end_time = changes["end_time"]
            end_day = (end_day or day) if end_time else None

        start = combine_timestamp(day, start_time)
        end = combine_timestamp(end_day, end_time) if end_day else None
        time_zone = self.context.settings.calendar.timezone if (start_time or end_time) else None
        return date_value(start, end, time_zone)

    def _category_property(self, schema: Dict[str, Any], category: Optional[str]) -> Dict[str, Any]:
        kind = property_kind(schema, self.context.names.category)
        if kind is not PropertyKind.SELECT:
            kind = PropertyKind.MULTI_SELECT
        return choices_value(kind, [category] if category else [])

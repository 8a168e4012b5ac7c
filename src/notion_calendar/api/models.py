from __future__ import annotations

from typing import Annotated, List, Optional

from pydantic import AfterValidator, AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field

from ..domain import CalendarEvent, DatabaseSummary
from ..domain.dates import format_repeat_days, parse_day, validate_clock


def _check_day(value: str) -> str:
    parse_day(value)
    return value


def _blank_to_none(value: object) -> object:
    return None if value == "" else value


def _check_clock(value: Optional[str]) -> Optional[str]:
    return None if value is None else validate_clock(value)


def _check_repeat_days(value: List[int]) -> List[int]:
    format_repeat_days(value)
    return value


Day = Annotated[str, AfterValidator(_check_day)]
Clock = Annotated[Optional[str], BeforeValidator(_blank_to_none), AfterValidator(_check_clock)]
Title = Annotated[str, Field(min_length=1)]
RepeatDays = Annotated[List[int], AfterValidator(_check_repeat_days)]


def _camel(name: str, camel: str, **kwargs):
    return Field(alias=camel, validation_alias=AliasChoices(camel, name), **kwargs)


class TokenRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(min_length=1)


class CollectionRequest(TokenRequest):
    collection_id: str = Field(
        alias="collectionId",
        validation_alias=AliasChoices("collectionId", "dbId", "collection_id"),
        min_length=1,
    )


class EntryRequest(TokenRequest):
    entry_id: str = Field(
        alias="entryId",
        validation_alias=AliasChoices("entryId", "pageId", "entry_id"),
        min_length=1,
    )


class AddEventRequest(CollectionRequest):
    title: Title
    date: Day
    start_time: Clock = _camel("start_time", "startTime", default=None)
    end_time: Clock = _camel("end_time", "endTime", default=None)
    category: Optional[str] = None
    is_routine: Optional[bool] = _camel("is_routine", "isRoutine", default=None)
    repeat_days: Optional[RepeatDays] = _camel("repeat_days", "repeatDays", default=None)


class UpdateEventRequest(CollectionRequest):
    entry_id: str = Field(
        alias="entryId",
        validation_alias=AliasChoices("entryId", "pageId", "entry_id"),
        min_length=1,
    )
    title: Optional[Title] = None
    date: Optional[Day] = None
    start_time: Clock = _camel("start_time", "startTime", default=None)
    end_time: Clock = _camel("end_time", "endTime", default=None)
    category: Optional[str] = None
    is_routine: Optional[bool] = _camel("is_routine", "isRoutine", default=None)
    repeat_days: Optional[RepeatDays] = _camel("repeat_days", "repeatDays", default=None)

    def changes(self) -> dict:
        """Fields the caller actually sent, keyed by attribute name."""

        supplied = self.model_fields_set - {"token", "collection_id", "entry_id"}
        return {name: getattr(self, name) for name in supplied}


class RenameCategoryRequest(CollectionRequest):
    old_name: str = _camel("old_name", "oldName", min_length=1)
    new_name: str = _camel("new_name", "newName", min_length=1)


class DeleteCategoryRequest(CollectionRequest):
    category_name: str = _camel("category_name", "categoryName", min_length=1)


class DatabasePayload(BaseModel):
    id: str
    title: str

    @classmethod
    def from_domain(cls, database: DatabaseSummary) -> "DatabasePayload":
        return cls(id=database.id, title=database.title)


class EventPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    date: Optional[str] = Field(default=None)
    original_date: Optional[str] = Field(default=None, alias="originalDate")
    start_time: Optional[str] = Field(default=None, alias="startTime")
    end_time: Optional[str] = Field(default=None, alias="endTime")
    is_completed: bool = Field(default=False, alias="isCompleted")
    is_priority: bool = Field(default=False, alias="isPriority")
    category: Optional[str] = Field(default=None)
    is_routine: bool = Field(default=False, alias="isRoutine")
    repeat_days: List[int] = Field(default_factory=list, alias="repeatDays")
    url: Optional[str] = Field(default=None)

    @classmethod
    def from_domain(cls, event: CalendarEvent) -> "EventPayload":
        return cls(
            id=event.id,
            title=event.title,
            date=event.date,
            original_date=event.original_date,
            start_time=event.start_time,
            end_time=event.end_time,
            is_completed=event.is_completed,
            is_priority=event.is_priority,
            category=event.category,
            is_routine=event.is_routine,
            repeat_days=list(event.repeat_days),
            url=event.url,
        )

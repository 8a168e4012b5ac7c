from __future__ import annotations

from typing import Any, Dict

from .models import (
    AddEventRequest,
    CollectionRequest,
    DeleteCategoryRequest,
    EntryRequest,
    RenameCategoryRequest,
    TokenRequest,
    UpdateEventRequest,
)
from .registry import register_api
from .serializers import serialize_database, serialize_event
from .state import api_state


@register_api(
    "list-databases",
    description="List the databases the integration token can see.",
    failure_message="데이터베이스 목록을 불러오지 못했습니다",
    request_model=TokenRequest,
    aliases=("databases",),
)
def list_databases(request: TokenRequest) -> Dict[str, Any]:
    databases = api_state.schema.list_databases(request.token)
    return {"databases": [serialize_database(database) for database in databases]}


@register_api(
    "list-events",
    description="Return every page of a database as a flat calendar event, ordered by date.",
    failure_message="일정을 불러오지 못했습니다",
    request_model=CollectionRequest,
    aliases=("events",),
)
def list_events(request: CollectionRequest) -> Dict[str, Any]:
    events = api_state.calendar.list_events(request.token, request.collection_id)
    return {"events": [serialize_event(event) for event in events]}


@register_api(
    "add-event",
    description="Create a page with title, date and optional times, category and routine settings.",
    failure_message="일정 추가 실패",
    request_model=AddEventRequest,
)
def add_event(request: AddEventRequest) -> Dict[str, Any]:
    page = api_state.calendar.add_event(
        request.token,
        request.collection_id,
        title=request.title,
        date=request.date,
        start_time=request.start_time,
        end_time=request.end_time,
        category=request.category,
        is_routine=request.is_routine,
        repeat_days=request.repeat_days,
    )
    return {"id": page.get("id")}


@register_api(
    "update-event",
    description="Change only the supplied fields of an existing page.",
    failure_message="일정 수정 실패",
    request_model=UpdateEventRequest,
)
def update_event(request: UpdateEventRequest) -> Dict[str, Any]:
    properties = api_state.calendar.update_event(
        request.token, request.collection_id, request.entry_id, request.changes()
    )
    return {"changed": sorted(properties)}


@register_api(
    "delete-event",
    description="Archive a page.",
    failure_message="일정 삭제 실패",
    request_model=EntryRequest,
)
def delete_event(request: EntryRequest) -> Dict[str, Any]:
    api_state.calendar.delete_event(request.token, request.entry_id)
    return {}


@register_api(
    "toggle-priority",
    description="Flip the priority checkbox of a page.",
    failure_message="중요 표시 변경 실패",
    request_model=EntryRequest,
)
def toggle_priority(request: EntryRequest) -> Dict[str, Any]:
    return {"isPriority": api_state.calendar.toggle_priority(request.token, request.entry_id)}


@register_api(
    "toggle-completion",
    description="Flip the completion checkbox of a page.",
    failure_message="완료 상태 변경 실패",
    request_model=EntryRequest,
)
def toggle_completion(request: EntryRequest) -> Dict[str, Any]:
    return {"isCompleted": api_state.calendar.toggle_completion(request.token, request.entry_id)}


@register_api(
    "postpone",
    description="Move a page's date (and end date) forward by one day, keeping times.",
    failure_message="일정 미루기 실패",
    request_model=EntryRequest,
)
def postpone(request: EntryRequest) -> Dict[str, Any]:
    moved = api_state.calendar.postpone(request.token, request.entry_id)
    return {"newDate": moved["date"], "newEndDate": moved["end"]}


@register_api(
    "list-categories",
    description="List the configured options of the category property.",
    failure_message="카테고리를 불러오지 못했습니다",
    request_model=CollectionRequest,
)
def list_categories(request: CollectionRequest) -> Dict[str, Any]:
    return {"categories": api_state.categories.list_categories(request.token, request.collection_id)}


@register_api(
    "rename-category",
    description="Rename a category option and rewrite the pages that use it.",
    failure_message="카테고리 이름 변경 실패",
    request_model=RenameCategoryRequest,
)
def rename_category(request: RenameCategoryRequest) -> Dict[str, Any]:
    updated = api_state.categories.rename_category(
        request.token, request.collection_id, request.old_name, request.new_name
    )
    return {"updated": updated}


@register_api(
    "delete-category",
    description="Remove a category option and strip it from the pages that use it.",
    failure_message="카테고리 삭제 실패",
    request_model=DeleteCategoryRequest,
)
def delete_category(request: DeleteCategoryRequest) -> Dict[str, Any]:
    updated = api_state.categories.delete_category(request.token, request.collection_id, request.category_name)
    return {"updated": updated}


@register_api(
    "init-collection-schema",
    description="Add any missing calendar properties to a database.",
    failure_message="데이터베이스 초기화 실패",
    request_model=CollectionRequest,
)
def init_collection_schema(request: CollectionRequest) -> Dict[str, Any]:
    return {"added": api_state.schema.initialize(request.token, request.collection_id)}

from __future__ import annotations

import itertools
import os
import tempfile
from datetime import date
from typing import Any, Dict, List, Optional

import pytest

os.environ.setdefault("NOTION_CALENDAR_LOG_DIR", tempfile.mkdtemp(prefix="notion-calendar-logs-"))

from notion_calendar.config import (  # noqa: E402
    AppSettings,
    CalendarSettings,
    NotionSettings,
    PropertySettings,
    ServerSettings,
)
from notion_calendar.services import ServiceContext  # noqa: E402

# Wednesday; weekday number 3 (수).
TODAY = date(2024, 3, 6)
DATABASE_ID = "db-1"
TOKEN = "secret_test_token"


def _rich_text(content: str) -> List[Dict[str, Any]]:
    return [{"type": "text", "text": {"content": content}, "plain_text": content}]


class FakeNotion:
    """In-memory stand-in for ``notion_client.Client`` covering the calls the proxy makes."""

    def __init__(self, page_size: int = 100) -> None:
        self.page_size = page_size
        self.schemas: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.titles: Dict[str, str] = {}
        self.pages_by_id: Dict[str, Dict[str, Any]] = {}
        self.calls: List[tuple] = []
        self.tokens: List[str] = []
        self._ids = itertools.count(1)
        self.databases = _Databases(self)
        self.pages = _Pages(self)

    def factory(self, **options: Any) -> "FakeNotion":
        self.tokens.append(options["auth"])
        return self

    def writes(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]

    # -- seeding -----------------------------------------------------------------

    def add_database(self, database_id: str, title: str, schema: Dict[str, str], **configs: Any) -> None:
        self.titles[database_id] = title
        self.schemas[database_id] = {}
        for name, kind in schema.items():
            self._set_schema_property(database_id, name, {kind: configs.get(name, {})})

    def add_page(self, database_id: str, properties: Dict[str, Any], *, page_id: Optional[str] = None) -> str:
        identifier = page_id or f"page-{next(self._ids)}"
        self.pages_by_id[identifier] = {
            "object": "page",
            "id": identifier,
            "parent": {"database_id": database_id},
            "archived": False,
            "url": f"https://www.notion.so/{identifier}",
            "properties": {name: self._to_read(value) for name, value in properties.items()},
        }
        return identifier

    def page_property(self, page_id: str, name: str) -> Dict[str, Any]:
        return self.pages_by_id[page_id]["properties"].get(name, {})

    # -- conversions ---------------------------------------------------------------

    def _to_read(self, value: Dict[str, Any]) -> Dict[str, Any]:
        kind = next(key for key in value if key != "type")
        payload = value[kind]
        if kind == "title":
            payload = [
                {**item, "plain_text": item.get("plain_text", (item.get("text") or {}).get("content", ""))}
                for item in payload
            ]
        elif kind == "multi_select":
            payload = [{"id": f"opt-{option['name']}", **option} for option in payload]
        elif kind == "select" and payload is not None:
            payload = {"id": f"opt-{payload['name']}", **payload}
        return {"id": f"prop-{next(self._ids)}", "type": kind, kind: payload}

    def _set_schema_property(self, database_id: str, name: str, config: Dict[str, Any]) -> None:
        kind = next(iter(config))
        settings = dict(config[kind] or {})
        if "options" in settings:
            settings["options"] = [
                {"id": option.get("id") or f"opt-{next(self._ids)}", "color": option.get("color", "default"), "name": option["name"]}
                for option in settings["options"]
            ]
        self.schemas[database_id][name] = {"id": f"prop-{next(self._ids)}", "name": name, "type": kind, kind: settings}

    # -- API surface ---------------------------------------------------------------

    def search(self, *, filter: Optional[Dict[str, Any]] = None, start_cursor: Optional[str] = None, **_: Any) -> Dict[str, Any]:
        self.calls.append(("search", filter))
        results = [
            {"object": "database", "id": database_id, "title": _rich_text(title) if title else []}
            for database_id, title in self.titles.items()
        ]
        return self._paginate(results, start_cursor)

    def _paginate(self, results: List[Dict[str, Any]], start_cursor: Optional[str]) -> Dict[str, Any]:
        offset = int(start_cursor or 0)
        chunk = results[offset : offset + self.page_size]
        has_more = offset + self.page_size < len(results)
        return {
            "object": "list",
            "results": chunk,
            "has_more": has_more,
            "next_cursor": str(offset + self.page_size) if has_more else None,
        }


class _Databases:
    def __init__(self, notion: FakeNotion) -> None:
        self.notion = notion

    def retrieve(self, database_id: str) -> Dict[str, Any]:
        self.notion.calls.append(("databases.retrieve", database_id))
        if database_id not in self.notion.schemas:
            raise RuntimeError(f"Could not find database with ID: {database_id}.")
        return {
            "object": "database",
            "id": database_id,
            "title": _rich_text(self.notion.titles[database_id]),
            "properties": self.notion.schemas[database_id],
        }

    def update(self, database_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        self.notion.calls.append(("databases.update", database_id, properties))
        for name, config in properties.items():
            self.notion._set_schema_property(database_id, name, config)
        return {"object": "database", "id": database_id, "properties": self.notion.schemas[database_id]}

    def query(
        self,
        database_id: str,
        *,
        sorts: Optional[List[Dict[str, Any]]] = None,
        filter: Optional[Dict[str, Any]] = None,
        start_cursor: Optional[str] = None,
        **_: Any,
    ) -> Dict[str, Any]:
        self.notion.calls.append(("databases.query", database_id, sorts, filter))
        pages = [
            page
            for page in self.notion.pages_by_id.values()
            if page["parent"]["database_id"] == database_id and not page["archived"]
        ]
        if filter:
            pages = [page for page in pages if _matches(page, filter)]
        for sort in reversed(sorts or []):
            pages.sort(
                key=lambda page: ((page["properties"].get(sort["property"], {}).get("date") or {}).get("start") or "9999"),
                reverse=sort.get("direction") == "descending",
            )
        return self.notion._paginate(pages, start_cursor)


def _matches(page: Dict[str, Any], condition: Dict[str, Any]) -> bool:
    prop = page["properties"].get(condition["property"], {})
    if "multi_select" in condition:
        names = [option["name"] for option in prop.get("multi_select") or []]
        return condition["multi_select"]["contains"] in names
    if "select" in condition:
        option = prop.get("select") or {}
        return option.get("name") == condition["select"]["equals"]
    raise AssertionError(f"unsupported filter {condition}")


class _Pages:
    def __init__(self, notion: FakeNotion) -> None:
        self.notion = notion

    def create(self, parent: Dict[str, Any], properties: Dict[str, Any]) -> Dict[str, Any]:
        self.notion.calls.append(("pages.create", parent, properties))
        page_id = self.notion.add_page(parent["database_id"], properties)
        return self.notion.pages_by_id[page_id]

    def retrieve(self, page_id: str) -> Dict[str, Any]:
        self.notion.calls.append(("pages.retrieve", page_id))
        if page_id not in self.notion.pages_by_id:
            raise RuntimeError(f"Could not find page with ID: {page_id}.")
        return self.notion.pages_by_id[page_id]

    def update(self, page_id: str, properties: Optional[Dict[str, Any]] = None, archived: Optional[bool] = None) -> Dict[str, Any]:
        self.notion.calls.append(("pages.update", page_id, properties, archived))
        if page_id not in self.notion.pages_by_id:
            raise RuntimeError(f"Could not find page with ID: {page_id}.")
        page = self.notion.pages_by_id[page_id]
        for name, value in (properties or {}).items():
            page["properties"][name] = self.notion._to_read(value)
        if archived is not None:
            page["archived"] = archived
        return page


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        server=ServerSettings(host="127.0.0.1", port=3000, cors_allow_origins=("*",)),
        notion=NotionSettings(timeout_ms=None, base_url=None, notion_version=None),
        properties=PropertySettings(
            date="Date",
            completed="Completed",
            priority="Priority",
            category="Category",
            routine="Routine",
            repeat_days="Repeat Days",
        ),
        calendar=CalendarSettings(timezone="Asia/Seoul"),
    )


@pytest.fixture
def notion() -> FakeNotion:
    fake = FakeNotion()
    fake.add_database(
        DATABASE_ID,
        "Calendar",
        {
            "Name": "title",
            "Date": "date",
            "Completed": "checkbox",
            "Priority": "checkbox",
            "Category": "multi_select",
            "Routine": "checkbox",
            "Repeat Days": "multi_select",
        },
        Category={"options": [{"name": "Work"}, {"name": "Home"}]},
    )
    return fake


@pytest.fixture
def context(settings: AppSettings, notion: FakeNotion) -> ServiceContext:
    ctx = ServiceContext(settings=settings, clock=lambda: TODAY)
    ctx.gateway.client_factory = notion.factory
    return ctx

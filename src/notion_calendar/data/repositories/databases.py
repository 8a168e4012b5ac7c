from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from notion_client.helpers import collect_paginated_api

from ...domain import DatabaseSummary


@dataclass(slots=True)
class DatabaseRepository:
    client: Any

    def list_visible(self) -> List[DatabaseSummary]:
        records = collect_paginated_api(
            self.client.search,
            filter={"property": "object", "value": "database"},
        )
        return [DatabaseSummary.from_record(record) for record in records]

    def schema(self, database_id: str) -> Dict[str, Dict[str, Any]]:
        response = self.client.databases.retrieve(database_id=database_id)
        return dict(response.get("properties") or {})

    def query(
        self,
        database_id: str,
        *,
        sorts: Optional[List[Dict[str, Any]]] = None,
        filter: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        arguments: Dict[str, Any] = {"database_id": database_id}
        if sorts:
            arguments["sorts"] = sorts
        if filter:
            arguments["filter"] = filter
        return collect_paginated_api(self.client.databases.query, **arguments)

    def update_properties(self, database_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        return self.client.databases.update(database_id=database_id, properties=properties)

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(slots=True)
class PageRepository:
    client: Any

    def create(self, database_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        return self.client.pages.create(parent={"database_id": database_id}, properties=properties)

    def fetch(self, page_id: str) -> Dict[str, Any]:
        return self.client.pages.retrieve(page_id=page_id)

    def update_properties(self, page_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        return self.client.pages.update(page_id=page_id, properties=properties)

    def archive(self, page_id: str) -> Dict[str, Any]:
        return self.client.pages.update(page_id=page_id, archived=True)

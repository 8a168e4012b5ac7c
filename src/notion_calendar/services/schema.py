from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from ..domain import DatabaseSummary, PropertyKind
from ..domain.dates import WEEKDAY_TOKENS
from .context import ServiceContext

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SchemaService:
    context: ServiceContext

    def list_databases(self, token: str) -> List[DatabaseSummary]:
        return self.context.open(token).databases.list_visible()

    def required_properties(self) -> Dict[str, Dict[str, Any]]:
        names = self.context.names
        return {
            names.date: {PropertyKind.DATE.value: {}},
            names.completed: {PropertyKind.CHECKBOX.value: {}},
            names.priority: {PropertyKind.CHECKBOX.value: {}},
            names.category: {PropertyKind.MULTI_SELECT.value: {"options": []}},
            names.routine: {PropertyKind.CHECKBOX.value: {}},
            names.repeat_days: {
                PropertyKind.MULTI_SELECT.value: {"options": [{"name": token} for token in WEEKDAY_TOKENS]}
            },
        }

    def initialize(self, token: str, database_id: str) -> List[str]:
        """Add whichever calendar properties the database lacks; returns their names."""

        session = self.context.open(token)
        existing = session.databases.schema(database_id)
        missing = {name: config for name, config in self.required_properties().items() if name not in existing}
        if not missing:
            return []
        session.databases.update_properties(database_id, missing)
        logger.info("Added properties %s to database %s", ", ".join(missing), database_id)
        return list(missing)

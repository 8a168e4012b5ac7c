"""Application services orchestrating Notion access and domain logic."""

from __future__ import annotations

from .calendar import CalendarService
from .categories import CategoryService
from .context import NotionSession, ServiceContext
from .schema import SchemaService

__all__ = ["CalendarService", "CategoryService", "NotionSession", "SchemaService", "ServiceContext"]

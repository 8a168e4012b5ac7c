"""Domain models for the Notion-backed calendar."""

from __future__ import annotations

from .enums import PropertyKind
from .models import CalendarEvent, DatabaseSummary

__all__ = ["CalendarEvent", "DatabaseSummary", "PropertyKind"]

"""Data access layer."""

from __future__ import annotations

from .notion import NotionGateway, NotionTokenMissingError

__all__ = ["NotionGateway", "NotionTokenMissingError"]

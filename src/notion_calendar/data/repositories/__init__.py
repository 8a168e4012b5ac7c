"""Notion repositories for databases and their pages."""

from __future__ import annotations

from .databases import DatabaseRepository
from .pages import PageRepository

__all__ = ["DatabaseRepository", "PageRepository"]

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from ..config import AppSettings, PropertySettings, get_settings
from ..data import NotionGateway
from ..data.repositories import DatabaseRepository, PageRepository


@dataclass(slots=True)
class NotionSession:
    """Repositories bound to one request's Notion client."""

    databases: DatabaseRepository
    pages: PageRepository


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root for services to share settings and the Notion gateway."""

    settings: AppSettings = field(default_factory=get_settings)
    clock: Optional[Callable[[], date]] = None
    gateway: NotionGateway = field(init=False)

    def __post_init__(self) -> None:
        self.gateway = NotionGateway(self.settings.notion)

    @property
    def names(self) -> PropertySettings:
        return self.settings.properties

    def open(self, token: str) -> NotionSession:
        client = self.gateway.client_for(token)
        return NotionSession(databases=DatabaseRepository(client), pages=PageRepository(client))

    def today(self) -> date:
        if self.clock is not None:
            return self.clock()
        return datetime.now(ZoneInfo(self.settings.calendar.timezone)).date()

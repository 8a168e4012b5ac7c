from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from notion_client import Client

from ..config.settings import NotionSettings
from ..errors import NotionTokenMissingError


# The SDK resets the level of the logger it is handed, so it gets its own.
client_logger = logging.getLogger(f"{__name__}.client")


@dataclass
class NotionGateway:
    """Builds a transient Notion client for each caller-supplied token.

    No client or session outlives the request that asked for it.
    """

    settings: NotionSettings
    client_factory: Callable[..., Any] = field(default=Client)

    def client_for(self, token: str) -> Any:
        if not token:
            raise NotionTokenMissingError("Notion token is required.")
        return self.client_factory(auth=token, logger=client_logger, **self.settings.client_options())

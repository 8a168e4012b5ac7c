from __future__ import annotations

from dataclasses import dataclass, field

from ..services import CalendarService, CategoryService, SchemaService, ServiceContext


@dataclass(slots=True)
class ApiState:
    context: ServiceContext = field(default_factory=ServiceContext)
    calendar: CalendarService = field(init=False)
    categories: CategoryService = field(init=False)
    schema: SchemaService = field(init=False)

    def __post_init__(self) -> None:
        self.bind(self.context)

    def bind(self, context: ServiceContext) -> None:
        """Point every service at ``context``."""

        self.context = context
        self.calendar = CalendarService(context)
        self.categories = CategoryService(context)
        self.schema = SchemaService(context)


api_state = ApiState()

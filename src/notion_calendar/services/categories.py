from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..domain import PropertyKind
from ..domain.properties import choice_options, choices_value, property_kind, read_choices
from ..errors import InvalidRequestError
from .context import NotionSession, ServiceContext

logger = logging.getLogger(__name__)

CATEGORY_NOT_FOUND_MESSAGE = "카테고리를 찾을 수 없습니다"
CHOICE_KINDS = (PropertyKind.SELECT, PropertyKind.MULTI_SELECT)


def _option_ref(option: Dict[str, Any], name: Optional[str] = None) -> Dict[str, Any]:
    ref = {key: option[key] for key in ("id", "color") if option.get(key)}
    ref["name"] = name or option["name"]
    return ref


def _dedupe(names: List[str]) -> List[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for name in names:
        if name not in seen:
            seen.add(name)
            ordered.append(name)
    return ordered


@dataclass(slots=True)
class CategoryService:
    """Category options live on the database schema; pages reference them by name.

    Rename and delete touch the schema first and the referencing pages after.
    Neither is transactional: a failure midway leaves the schema changed and
    only some pages rewritten.
    """

    context: ServiceContext

    def list_categories(self, token: str, database_id: str) -> List[str]:
        schema = self.context.open(token).databases.schema(database_id)
        return [option["name"] for option in choice_options(schema.get(self.context.names.category))]

    def rename_category(self, token: str, database_id: str, old_name: str, new_name: str) -> int:
        session = self.context.open(token)
        kind, options = self._require_option(session, database_id, old_name)
        if old_name == new_name:
            return 0

        merged = any(option["name"] == new_name for option in options)
        renamed: list[Dict[str, Any]] = []
        for option in options:
            if option["name"] != old_name:
                renamed.append(_option_ref(option))
            elif not merged:
                renamed.append(_option_ref(option, new_name))

        def substitute(names: List[str]) -> List[str]:
            return _dedupe([new_name if name == old_name else name for name in names])

        updated = self._rewrite(session, database_id, kind, old_name, renamed, substitute)
        logger.info("Renamed category %r to %r in database %s (%d pages)", old_name, new_name, database_id, updated)
        return updated

    def delete_category(self, token: str, database_id: str, category_name: str) -> int:
        session = self.context.open(token)
        kind, options = self._require_option(session, database_id, category_name)
        remaining = [_option_ref(option) for option in options if option["name"] != category_name]

        def strip(names: List[str]) -> List[str]:
            return [name for name in names if name != category_name]

        updated = self._rewrite(session, database_id, kind, category_name, remaining, strip)
        logger.info("Deleted category %r from database %s (%d pages)", category_name, database_id, updated)
        return updated

    def _require_option(
        self, session: NotionSession, database_id: str, name: str
    ) -> Tuple[PropertyKind, List[Dict[str, Any]]]:
        schema = session.databases.schema(database_id)
        category_property = self.context.names.category
        kind = property_kind(schema, category_property)
        options = choice_options(schema.get(category_property))
        if kind not in CHOICE_KINDS or not any(option["name"] == name for option in options):
            raise InvalidRequestError(f"{CATEGORY_NOT_FOUND_MESSAGE}: {name}")
        return kind, options

    def _rewrite(
        self,
        session: NotionSession,
        database_id: str,
        kind: PropertyKind,
        name: str,
        options: List[Dict[str, Any]],
        transform: Callable[[List[str]], List[str]],
    ) -> int:
        category_property = self.context.names.category
        condition = "contains" if kind is PropertyKind.MULTI_SELECT else "equals"
        # Collected before the schema change so pages still reference the old option.
        pages = session.databases.query(
            database_id,
            filter={"property": category_property, kind.value: {condition: name}},
        )

        session.databases.update_properties(database_id, {category_property: {kind.value: {"options": options}}})

        updated = 0
        for page in pages:
            current = read_choices(page.get("properties") or {}, category_property)
            session.pages.update_properties(page["id"], {category_property: choices_value(kind, transform(current))})
            updated += 1
        return updated

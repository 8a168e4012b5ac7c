"""Readers and writers for Notion property values."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .enums import PropertyKind

DEFAULT_TITLE = "제목 없음"
DEFAULT_TITLE_PROPERTY = "Name"

Properties = Dict[str, Dict[str, Any]]


def plain_text(rich_text: Optional[Iterable[Dict[str, Any]]]) -> str:
    parts: list[str] = []
    for item in rich_text or ():
        text = item.get("plain_text")
        if text is None:
            text = (item.get("text") or {}).get("content", "")
        parts.append(text)
    return "".join(parts)


def extract_title(properties: Properties) -> str:
    for prop in properties.values():
        if prop.get("type") != PropertyKind.TITLE.value:
            continue
        text = plain_text(prop.get("title"))
        if text:
            return text
    return DEFAULT_TITLE


def find_title_property(schema: Properties) -> str:
    for name, prop in schema.items():
        if prop.get("type") == PropertyKind.TITLE.value:
            return name
    return DEFAULT_TITLE_PROPERTY


def property_kind(schema: Properties, name: str) -> Optional[PropertyKind]:
    prop = schema.get(name)
    if not prop:
        return None
    try:
        return PropertyKind(prop.get("type"))
    except ValueError:
        return None


def read_checkbox(properties: Properties, name: str) -> bool:
    prop = properties.get(name) or {}
    return bool(prop.get("checkbox"))


def read_date(properties: Properties, name: str) -> Optional[Dict[str, Any]]:
    prop = properties.get(name) or {}
    value = prop.get("date")
    if not value or not value.get("start"):
        return None
    return value


def read_choices(properties: Properties, name: str) -> List[str]:
    """Return option names of a select or multi-select value, in stored order."""

    prop = properties.get(name) or {}
    kind = prop.get("type")
    if kind == PropertyKind.MULTI_SELECT.value:
        return [option["name"] for option in prop.get("multi_select") or []]
    if kind == PropertyKind.SELECT.value:
        option = prop.get("select")
        return [option["name"]] if option else []
    return []


def choice_options(schema_property: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not schema_property:
        return []
    kind = schema_property.get("type")
    if kind not in (PropertyKind.SELECT.value, PropertyKind.MULTI_SELECT.value):
        return []
    config = schema_property.get(kind) or {}
    return list(config.get("options") or [])


def title_value(text: str) -> Dict[str, Any]:
    return {"title": [{"text": {"content": text}}]}


def date_value(start: str, end: Optional[str] = None, time_zone: Optional[str] = None) -> Dict[str, Any]:
    value: Dict[str, Any] = {"start": start}
    if end:
        value["end"] = end
    if time_zone:
        value["time_zone"] = time_zone
    return {"date": value}


def checkbox_value(flag: bool) -> Dict[str, Any]:
    return {"checkbox": bool(flag)}


def choices_value(kind: Optional[PropertyKind], names: Iterable[str]) -> Dict[str, Any]:
    """Encode option names for a select or multi-select property.

    A select property keeps only the first name; an empty list clears it.
    """

    names = [name for name in names if name]
    if kind is PropertyKind.SELECT:
        return {"select": {"name": names[0]} if names else None}
    return {"multi_select": [{"name": name} for name in names]}

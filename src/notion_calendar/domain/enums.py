from __future__ import annotations

from enum import Enum


class PropertyKind(str, Enum):
    TITLE = "title"
    CHECKBOX = "checkbox"
    SELECT = "select"
    MULTI_SELECT = "multi_select"
    DATE = "date"

"""Field normalization between the legacy Mapeo and current CoMapeo schemas."""

from __future__ import annotations

import copy
from typing import Any

from mapeo_deconstructor.core.models import FieldDialect

TYPE_RENAMES = {
    "textarea": "text",
    "select_one": "selectOne",
    "select_many": "selectMultiple",
}


def detect_dialect(field: dict[str, Any]) -> FieldDialect:
    """Classify a field definition.

    A field is CURRENT if it carries ``tagKey`` or if its first option is a
    structured ``{label, value}`` pair rather than a bare string.
    """
    if "tagKey" in field:
        return FieldDialect.CURRENT
    options = field.get("options")
    if isinstance(options, list) and options and isinstance(options[0], dict):
        return FieldDialect.CURRENT
    return FieldDialect.LEGACY


def normalize_field(field: dict[str, Any]) -> dict[str, Any]:
    """Return a CURRENT-dialect copy of field. The input is never mutated."""
    if detect_dialect(field) is FieldDialect.CURRENT:
        return copy.deepcopy(field)
    return _normalize_legacy(field)


def _normalize_legacy(field: dict[str, Any]) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for name, value in field.items():
        if name == "key":
            normalized["tagKey"] = value
        elif name == "placeholder" and "helperText" not in field:
            normalized["helperText"] = value
        elif name == "type":
            normalized["type"] = TYPE_RENAMES.get(value, value)
        elif name == "options" and isinstance(value, list):
            normalized["options"] = [_normalize_option(o) for o in value]
        else:
            normalized[name] = copy.deepcopy(value)
    normalized.setdefault("universal", False)
    return normalized


def _normalize_option(option: Any) -> Any:
    if isinstance(option, str):
        return {"label": option, "value": option}
    return copy.deepcopy(option)

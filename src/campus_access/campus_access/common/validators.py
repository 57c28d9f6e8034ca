from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from ..core.exceptions import ValidationError


def _require_text(value: Any, field_name: str) -> None:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")


def require_non_empty(value: Any, field_name: str) -> str:
    _require_text(value, field_name)
    if value is None or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Any, field_name: str) -> Optional[str]:
    """Stripped text, or None when absent or blank."""
    _require_text(value, field_name)
    if value is None or not value.strip():
        return None
    return value.strip()


def require_fields(values: Mapping[str, Any], fields: Sequence[str], message: str) -> Dict[str, str]:
    """Return the stripped fields; one ValidationError naming the whole group when any is blank.

    Non-string values are rejected by field name before the blank check.
    """
    for f in fields:
        _require_text(values.get(f), f)
    if any(values.get(f) is None or not values[f].strip() for f in fields):
        raise ValidationError(message)
    return {f: values[f].strip() for f in fields}


def parse_int(value: Any, field_name: str, *, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")

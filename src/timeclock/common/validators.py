from __future__ import annotations

from typing import Any, Mapping

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_non_negative(value: Any, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number


def pick(raw: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    """Return the first present key among camelCase/snake_case aliases."""
    for name in names:
        if name in raw and raw[name] is not None:
            return raw[name]
    return default

"""Type checks for records read back from the data files."""

import math
from typing import Any, Optional

from ..exceptions import ValidationError


def require_mapping(data: Any, entity: str) -> dict:
    if not isinstance(data, dict):
        raise ValidationError(f"Registro de {entity} no válido: se esperaba un objeto")
    return data


def text_field(data: dict, key: str, default: Optional[str] = None) -> str:
    """A string field; missing or null falls back to ``default`` when one is given."""
    value = data.get(key)
    if value is None and default is not None:
        return default
    if not isinstance(value, str):
        raise ValidationError(f"Campo '{key}' debe ser texto")
    return value


def number_field(data: dict, key: str, default: Optional[float] = None) -> float:
    """A finite float field; NaN and infinities are rejected."""
    value = data.get(key, default)
    if isinstance(value, bool):
        raise ValidationError(f"Campo '{key}' debe ser numérico")
    number = float(value)
    if not math.isfinite(number):
        raise ValidationError(f"Campo '{key}' debe ser un número finito")
    return number

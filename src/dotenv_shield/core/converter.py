"""
Value conversion from raw environment strings to typed Python values.
"""

from decimal import Decimal
import math
from typing import Any

from .errors import ConversionError
from .inference import EMAIL_PATTERN, INTEGER_PATTERN, InferredType, is_well_formed_url, parse_json


def _to_integer(value: str) -> int:
    stripped = value.strip()
    try:
        return int(stripped, 10)
    except ValueError:
        # Past the int/str digit limit; Decimal has none
        if INTEGER_PATTERN.fullmatch(stripped):
            return int(Decimal(stripped))
        raise ConversionError(
            f'Cannot convert "{value}" to integer', value=value, target_type="integer"
        ) from None


def _to_number(value: str, target_type: str) -> float:
    try:
        number = float(value.strip())
    except ValueError:
        number = math.nan
    if not math.isfinite(number):
        raise ConversionError(
            f'Cannot convert "{value}" to number', value=value, target_type=target_type
        )
    return number


def _to_port(value: str) -> int | float:
    number = _to_number(value, "port")
    return int(number) if number.is_integer() else number


def _to_json(value: str) -> Any:
    try:
        return parse_json(value)
    except ValueError:
        raise ConversionError(
            f'Cannot parse "{value}" as JSON', value=value, target_type="json"
        ) from None


def _to_url(value: str) -> str:
    if not is_well_formed_url(value):
        raise ConversionError(f'"{value}" is not a valid URL', value=value, target_type="url")
    return value


def _to_email(value: str) -> str:
    if not EMAIL_PATTERN.fullmatch(value):
        raise ConversionError(
            f'"{value}" is not a valid email', value=value, target_type="email"
        )
    return value


def convert_value(value: Any, target_type: InferredType | str | None) -> Any:
    """
    Convert a raw value to the Python type implied by ``target_type``.

    Args:
        value: Raw value, normally a string from the environment
        target_type: Inferred type tag; unknown tags are treated as string

    Returns:
        bool, int, float, parsed JSON, or str. ``None`` passes through.

    Raises:
        ConversionError: If the value cannot be represented as the target type
    """
    if value is None:
        return None

    try:
        kind = InferredType(target_type)
    except ValueError:
        kind = InferredType.STRING

    if kind is InferredType.BOOLEAN:
        if isinstance(value, bool):
            return value
        return str(value).lower() == "true"

    if kind is InferredType.INTEGER:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return _to_integer(str(value))

    if kind in (InferredType.NUMBER, InferredType.PORT):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return value
        if kind is InferredType.PORT:
            return _to_port(str(value))
        return _to_number(str(value), kind.value)

    if kind is InferredType.JSON:
        if isinstance(value, (dict, list)):
            return value
        return _to_json(str(value))

    if kind is InferredType.URL:
        return _to_url(str(value))

    if kind is InferredType.EMAIL:
        return _to_email(str(value))

    return str(value)

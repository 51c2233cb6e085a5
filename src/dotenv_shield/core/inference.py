"""
Type inference for raw environment values.

Rules are evaluated in a fixed order and the first match wins. The order matters
because the patterns overlap: "3000" is an integer before it could be anything
else, and "https://x" is a URL before it is a plain string.
"""

from enum import Enum
import json
import re
from typing import Any, Callable

from pydantic import AnyUrl, TypeAdapter, ValidationError

# Whole-value patterns, always applied with fullmatch
BOOLEAN_PATTERN = re.compile(r"(true|false)", re.IGNORECASE)
INTEGER_PATTERN = re.compile(r"-?\d+")
NUMBER_PATTERN = re.compile(r"-?\d+\.\d+")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PORT_PATTERN = re.compile(r"\d+")

URL_SCHEMES = ("http://", "https://", "ftp://")
PORT_MIN = 1
PORT_MAX = 65535

_url_adapter = TypeAdapter(AnyUrl)


class InferredType(str, Enum):
    """Semantic type of a raw value."""

    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    PORT = "port"
    JSON = "json"
    URL = "url"
    EMAIL = "email"


def is_well_formed_url(value: str) -> bool:
    """Whether value parses as an absolute URI."""
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a JSON value")


def parse_json(text: str) -> Any:
    """
    Parse strict JSON. The NaN, Infinity and -Infinity extensions are rejected.

    Raises:
        ValueError: If text is not valid JSON
    """
    return json.loads(text, parse_constant=_reject_constant)


def _is_boolean(value: str) -> bool:
    return bool(BOOLEAN_PATTERN.fullmatch(value.strip()))


def _is_integer(value: str) -> bool:
    return bool(INTEGER_PATTERN.fullmatch(value.strip()))


def _is_number(value: str) -> bool:
    return bool(NUMBER_PATTERN.fullmatch(value.strip()))


def _is_url(value: str) -> bool:
    return is_well_formed_url(value) and value.startswith(URL_SCHEMES)


def _is_json(value: str) -> bool:
    stripped = value.strip()
    bracketed = (stripped.startswith("{") and stripped.endswith("}")) or (
        stripped.startswith("[") and stripped.endswith("]")
    )
    if not bracketed:
        return False
    try:
        parse_json(stripped)
    except ValueError:
        return False
    return True


def _is_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.fullmatch(value))


_RULES: list[tuple[Callable[[str], bool], InferredType]] = [
    (_is_boolean, InferredType.BOOLEAN),
    (_is_integer, InferredType.INTEGER),
    (_is_number, InferredType.NUMBER),
    (_is_url, InferredType.URL),
    (_is_json, InferredType.JSON),
    (_is_email, InferredType.EMAIL),
]


def infer_type(value) -> InferredType:
    """
    Infer the semantic type of a raw string value.

    Total and deterministic: anything that matches no rule, including empty or
    non-string input, is a string. Never returns ``InferredType.PORT``; see
    ``is_port_value`` for that refinement.
    """
    if not value or not isinstance(value, str):
        return InferredType.STRING

    for predicate, inferred in _RULES:
        if predicate(value):
            return inferred
    return InferredType.STRING


def is_port_value(value: str) -> bool:
    """Digits only, in the TCP/UDP port range 1..65535."""
    if not isinstance(value, str):
        return False
    digits = value.strip()
    if not PORT_PATTERN.fullmatch(digits):
        return False
    significant = digits.lstrip("0") or "0"
    if len(significant) > len(str(PORT_MAX)):
        return False
    return PORT_MIN <= int(significant) <= PORT_MAX

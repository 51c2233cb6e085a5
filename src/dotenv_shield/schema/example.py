"""Example document rendering (.env.example)."""

import json

from ..config.constants import (
    DEFAULT_SECRET_PLACEHOLDER,
    EXAMPLE_STRING_MAX,
    GENERATOR_NAME,
    SECRET_PLACEHOLDERS,
)
from ..core.classifier import is_secret_key
from ..core.inference import InferredType, parse_json


def example_value(key: str, value: str, inferred: InferredType | str) -> str:
    """
    Example value for one variable.

    Secret-classified keys get a fixed placeholder chosen by type; the raw value
    never appears. Other values are passed through, with JSON re-indented and
    long plain strings shortened.
    """
    kind = InferredType(inferred)
    if is_secret_key(key):
        return SECRET_PLACEHOLDERS.get(kind.value, DEFAULT_SECRET_PLACEHOLDER)

    if kind is InferredType.BOOLEAN:
        return "true" if value.strip().lower() == "true" else "false"
    if kind is InferredType.JSON:
        try:
            return json.dumps(parse_json(value), indent=2, ensure_ascii=False)
        except ValueError:
            return value
    if kind is InferredType.STRING and len(value) > EXAMPLE_STRING_MAX:
        return value[:EXAMPLE_STRING_MAX] + "..."
    return value


def placeholder_value(key: str, is_secret: bool) -> str:
    """Stand-in for a variable carried over from a previous schema."""
    if is_secret:
        return DEFAULT_SECRET_PLACEHOLDER
    return f"your-{key.lower()}"


def render_example(entries: dict[str, str], generated_at: str) -> str:
    """Example file text with its generated-by header."""
    header = (
        "# Example environment variables\n"
        "# Copy this file to .env and fill in your actual values\n"
        f"# Generated by {GENERATOR_NAME} on {generated_at}\n"
        "\n"
    )
    body = "\n".join(f"{key}={value}" for key, value in entries.items())
    return header + body + "\n"

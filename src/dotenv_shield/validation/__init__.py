"""
Environment validation against a generated schema.
"""

from .structural import build_adapter, check_value
from .validator import (
    ValidationReport,
    is_system_env_var,
    load_schema,
    parse_schema,
    quick_validate,
    validate,
    validate_env,
    validate_single_var,
)

__all__ = [
    "ValidationReport",
    "build_adapter",
    "check_value",
    "is_system_env_var",
    "load_schema",
    "parse_schema",
    "quick_validate",
    "validate",
    "validate_env",
    "validate_single_var",
]

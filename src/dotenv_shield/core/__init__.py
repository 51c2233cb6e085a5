"""
Core inference primitives: type inference, secret classification and value
conversion. Everything here is pure and free of I/O.
"""

from .classifier import is_secret_key
from .converter import convert_value
from .errors import (
    ConfigurationError,
    ConversionError,
    DotenvShieldError,
    EmptyInputError,
    MalformedSchemaError,
    SchemaError,
    SchemaNotFoundError,
)
from .inference import InferredType, infer_type, is_port_value

__all__ = [
    "InferredType",
    "infer_type",
    "is_port_value",
    "is_secret_key",
    "convert_value",
    "DotenvShieldError",
    "ConfigurationError",
    "ConversionError",
    "EmptyInputError",
    "SchemaError",
    "SchemaNotFoundError",
    "MalformedSchemaError",
]

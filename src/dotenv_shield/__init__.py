"""
dotenv-shield
=============

Infer a schema from a ``.env`` file and validate runtime environment variables
against it.

Usage:
    from dotenv_shield import generate_schema, validate_env

    generate_schema(".env", ".env.schema.json", ".env.example")
    report = validate_env(".env.schema.json")
    if not report.success:
        print("\\n".join(report.errors))
"""

from .config.constants import GENERATOR_VERSION as __version__
from .core import (
    ConfigurationError,
    ConversionError,
    DotenvShieldError,
    EmptyInputError,
    InferredType,
    MalformedSchemaError,
    SchemaNotFoundError,
    convert_value,
    infer_type,
    is_port_value,
    is_secret_key,
)
from .io.scanner import detect_env_usage
from .schema.builder import build_schema, generate_schema
from .schema.models import GenerationResult, PropertyDescriptor, SchemaDocument, StructuralType
from .validation import (
    ValidationReport,
    load_schema,
    quick_validate,
    validate,
    validate_env,
    validate_single_var,
)

__all__ = [
    "__version__",
    # Generation
    "build_schema",
    "generate_schema",
    "detect_env_usage",
    "GenerationResult",
    # Validation
    "validate",
    "validate_env",
    "validate_single_var",
    "quick_validate",
    "load_schema",
    "ValidationReport",
    # Inference primitives
    "InferredType",
    "StructuralType",
    "PropertyDescriptor",
    "SchemaDocument",
    "infer_type",
    "is_port_value",
    "is_secret_key",
    "convert_value",
    # Errors
    "DotenvShieldError",
    "ConfigurationError",
    "ConversionError",
    "EmptyInputError",
    "MalformedSchemaError",
    "SchemaNotFoundError",
]

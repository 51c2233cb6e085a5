"""
Schema document models, the marker envelope and example rendering.

The builder lives in ``dotenv_shield.schema.builder`` and is re-exported from
the top-level package.
"""

from .envelope import Envelope, split_envelope, unwrap, wrap
from .models import (
    JSON_SHAPE,
    GenerationResult,
    GenerationStats,
    PropertyDescriptor,
    PropertyMeta,
    SchemaDocument,
    StructuralType,
    structural_type_for,
)

__all__ = [
    "Envelope",
    "split_envelope",
    "unwrap",
    "wrap",
    "JSON_SHAPE",
    "GenerationResult",
    "GenerationStats",
    "PropertyDescriptor",
    "PropertyMeta",
    "SchemaDocument",
    "StructuralType",
    "structural_type_for",
]

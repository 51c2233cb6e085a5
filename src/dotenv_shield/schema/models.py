"""
Schema document models.

A generated schema is a small JSON-Schema subset. Descriptors only persist the
coarse structural type, so each one also records the finer inferred type in
``_meta.originalType``; the mapping below keeps the two in step.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..core.inference import InferredType


class StructuralType(str, Enum):
    """JSON-like type tag stored in a schema document."""

    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    OBJECT = "object"
    ARRAY = "array"


# Either an object or an array; the structural type of JSON-valued variables
JSON_SHAPE = [StructuralType.OBJECT, StructuralType.ARRAY]

STRUCTURAL_TYPE_MAP: dict[InferredType, StructuralType | list[StructuralType]] = {
    InferredType.BOOLEAN: StructuralType.BOOLEAN,
    InferredType.INTEGER: StructuralType.INTEGER,
    InferredType.PORT: StructuralType.INTEGER,
    InferredType.NUMBER: StructuralType.NUMBER,
    InferredType.JSON: JSON_SHAPE,
    InferredType.URL: StructuralType.STRING,
    InferredType.EMAIL: StructuralType.STRING,
    InferredType.STRING: StructuralType.STRING,
}

FORMAT_MAP = {
    InferredType.URL: "uri",
    InferredType.EMAIL: "email",
}


def structural_type_for(inferred: InferredType | str) -> StructuralType | list[StructuralType]:
    """Canonical mapping from an inferred type to its structural type."""
    try:
        return STRUCTURAL_TYPE_MAP[InferredType(inferred)]
    except ValueError:
        return StructuralType.STRING


def dump_structural_type(value: StructuralType | list[StructuralType]) -> str | list[str]:
    """JSON-ready form of a structural type."""
    if isinstance(value, list):
        return [StructuralType(item).value for item in value]
    return StructuralType(value).value


class PropertyMeta(BaseModel):
    """Internal metadata kept under ``_meta``. Unknown keys are preserved."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    inferred: bool | None = None
    original_type: str | None = Field(default=None, alias="originalType")
    is_secret: bool = Field(default=False, alias="isSecret")
    detected_in_code: bool = Field(default=False, alias="detectedInCode")


class PropertyDescriptor(BaseModel):
    """One variable's entry in ``properties``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: StructuralType | list[StructuralType] = StructuralType.STRING
    description: str | None = None
    format: str | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    min_length: int | None = Field(default=None, alias="minLength")
    required: bool | None = None
    meta: PropertyMeta = Field(default_factory=PropertyMeta, alias="_meta")

    @property
    def types(self) -> list[StructuralType]:
        """The structural type as a list, single tags included."""
        if isinstance(self.type, list):
            return list(self.type)
        return [self.type]

    @property
    def is_json_shape(self) -> bool:
        """True for the object-or-array variant used by JSON values."""
        return isinstance(self.type, list) and set(self.type) == set(JSON_SHAPE)

    @property
    def is_secret(self) -> bool:
        return self.meta.is_secret

    def resolve_inferred_type(self) -> InferredType:
        """
        Conversion type for this descriptor.

        Prefers the stored ``originalType``. Otherwise re-derives it from the
        structural type and format.
        """
        if self.meta.original_type:
            try:
                return InferredType(self.meta.original_type)
            except ValueError:
                return InferredType.STRING
        return inferred_type_from_structure(self.type, self.format)


def inferred_type_from_structure(
    structural: StructuralType | list[StructuralType] | str | list[str] | None,
    fmt: str | None = None,
) -> InferredType:
    """Reverse of the canonical mapping, used when ``originalType`` is absent."""
    if fmt == "uri":
        return InferredType.URL
    if fmt == "email":
        return InferredType.EMAIL
    if isinstance(structural, list):
        if StructuralType.OBJECT in structural or StructuralType.ARRAY in structural:
            return InferredType.JSON
        return InferredType.STRING
    if structural in (StructuralType.OBJECT, StructuralType.ARRAY):
        return InferredType.JSON
    if structural == StructuralType.BOOLEAN:
        return InferredType.BOOLEAN
    if structural == StructuralType.INTEGER:
        return InferredType.INTEGER
    if structural == StructuralType.NUMBER:
        return InferredType.NUMBER
    return InferredType.STRING


class SchemaDocument(BaseModel):
    """A loaded schema file. ``properties`` is mandatory."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    schema_uri: str | None = Field(default=None, alias="$schema")
    title: str | None = None
    description: str | None = None
    properties: dict[str, PropertyDescriptor]
    required: list[str] = Field(default_factory=list)
    additional_properties: bool = Field(default=True, alias="additionalProperties")
    meta: dict[str, Any] | None = Field(default=None, alias="_meta")


class GenerationStats(BaseModel):
    total_vars: int = 0
    required_vars: int = 0
    detected_vars: int = 0
    secret_vars: int = 0


class GenerationResult(BaseModel):
    """Output of a generation run."""

    schema_document: dict[str, Any]
    example: dict[str, str]
    stats: GenerationStats
    schema_path: str | None = None
    example_path: str | None = None
    backup_path: str | None = None

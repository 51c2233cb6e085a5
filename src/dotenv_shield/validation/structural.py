"""
Structural checks for converted values.

Each property descriptor is turned into a pydantic ``TypeAdapter`` carrying its
type, bounds, length and format constraints. Validation runs in strict mode so
a value converted to the wrong Python type is reported instead of coerced.
"""

from typing import Annotated, Any, Callable, Union

from pydantic import AfterValidator, Field, StrictBool, StrictFloat, StrictInt, StrictStr, TypeAdapter
from pydantic import ValidationError

from ..core.inference import EMAIL_PATTERN, is_well_formed_url
from ..schema.models import PropertyDescriptor, StructuralType

VALUE_ERROR_PREFIX = "Value error, "


def _format_check(key: str, fmt: str) -> Callable[[str], str] | None:
    if fmt == "uri":

        def check_uri(value: str) -> str:
            if not is_well_formed_url(value):
                raise ValueError(f"{key} must be a valid URL")
            return value

        return check_uri

    if fmt == "email":

        def check_email(value: str) -> str:
            if not EMAIL_PATTERN.fullmatch(value):
                raise ValueError(f"{key} must be a valid email")
            return value

        return check_email

    return None


def _annotated(base: Any, metadata: list[Any]) -> Any:
    if not metadata:
        return base
    return Annotated[(base, *metadata)]


def _bounds(descriptor: PropertyDescriptor) -> list[Any]:
    limits = {}
    if descriptor.minimum is not None:
        limits["ge"] = descriptor.minimum
    if descriptor.maximum is not None:
        limits["le"] = descriptor.maximum
    return [Field(**limits)] if limits else []


def _annotation_for(structural: StructuralType, descriptor: PropertyDescriptor, key: str) -> Any:
    if structural is StructuralType.STRING:
        metadata: list[Any] = []
        if descriptor.min_length is not None:
            metadata.append(Field(min_length=descriptor.min_length))
        check = _format_check(key, descriptor.format) if descriptor.format else None
        if check is not None:
            metadata.append(AfterValidator(check))
        return _annotated(StrictStr, metadata)

    if structural is StructuralType.INTEGER:
        return _annotated(StrictInt, _bounds(descriptor))
    if structural is StructuralType.NUMBER:
        return _annotated(StrictFloat, _bounds(descriptor))
    if structural is StructuralType.BOOLEAN:
        return StrictBool
    if structural is StructuralType.OBJECT:
        return dict[str, Any]
    return list[Any]


def build_adapter(descriptor: PropertyDescriptor, key: str) -> TypeAdapter:
    """TypeAdapter enforcing everything ``descriptor`` declares about a value."""
    annotations = [_annotation_for(StructuralType(t), descriptor, key) for t in descriptor.types]
    if len(annotations) == 1:
        return TypeAdapter(annotations[0])
    return TypeAdapter(Union[tuple(annotations)])


def first_error_message(error: ValidationError) -> str:
    """Readable message for the first issue in a ValidationError."""
    issues = error.errors()
    if not issues:
        return str(error)
    message = issues[0]["msg"]
    if message.startswith(VALUE_ERROR_PREFIX):
        message = message[len(VALUE_ERROR_PREFIX) :]
    return message


def check_value(descriptor: PropertyDescriptor, key: str, value: Any) -> str | None:
    """
    Check a converted value against its descriptor.

    Returns:
        None when the value conforms, otherwise an error message
    """
    try:
        build_adapter(descriptor, key).validate_python(value, strict=True)
    except ValidationError as e:
        return first_error_message(e)
    return None

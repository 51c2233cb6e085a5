"""
Environment Validator
=====================

Validates live environment variables against a schema document.

``validate`` is the pure core. It takes the schema and an explicit mapping of
variables, never reads ``os.environ`` itself and never mutates its inputs.
``validate_env`` adds schema loading and defaults the variables to a snapshot
of the process environment.
"""

import os
from pathlib import Path
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..config.constants import DEFAULT_SCHEMA_PATH, REDACTED, SYSTEM_ENV_VARS
from ..core.converter import convert_value
from ..core.errors import ConversionError, DotenvShieldError, MalformedSchemaError
from ..io.files import read_schema_data
from ..logging import get_logger
from ..schema.models import PropertyDescriptor, SchemaDocument
from .structural import check_value

logger = get_logger("Validate")


class ValidationReport(BaseModel):
    """Outcome of one validation run."""

    success: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    validated_count: int = Field(default=0, alias="validatedCount")
    total_variables: int = Field(default=0, alias="totalVariables")
    model_config = ConfigDict(populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def parse_schema(data: Mapping[str, Any]) -> SchemaDocument:
    """
    Validate raw schema data into a SchemaDocument.

    Raises:
        MalformedSchemaError: If ``properties`` is missing or the structure is invalid
    """
    if not isinstance(data, Mapping) or "properties" not in data:
        raise MalformedSchemaError("Invalid schema: missing properties")
    try:
        return SchemaDocument.model_validate(dict(data))
    except ValidationError as e:
        issues = [
            f"[{' -> '.join(str(x) for x in issue['loc'])}] {issue['msg']}" for issue in e.errors()
        ]
        raise MalformedSchemaError("Invalid schema structure", details={"errors": issues}) from e


def load_schema(schema_path: str | Path = DEFAULT_SCHEMA_PATH) -> SchemaDocument:
    """
    Load a schema file, handling the merge markers.

    Raises:
        SchemaNotFoundError: If the file does not exist
        MalformedSchemaError: If the file is not valid JSON or not a valid schema
    """
    return parse_schema(read_schema_data(schema_path))


def is_system_env_var(key: str, extra: Iterable[str] = ()) -> bool:
    """Shell, platform or CI housekeeping variable (exact name or prefix match)."""
    return any(key == name or key.startswith(name) for name in (*SYSTEM_ENV_VARS, *extra))


def is_warning_only(descriptor: PropertyDescriptor, message: str) -> bool:
    """
    Whether a failure may be reported as a warning outside CI mode.

    Every failure is currently an error.
    """
    return False


def _is_unset(value: Any) -> bool:
    return value is None or value == ""


def check_variable(key: str, value: Any, descriptor: PropertyDescriptor) -> str | None:
    """
    Convert and check one value.

    Returns:
        None on success, otherwise a ``KEY=value: message`` error line
    """
    try:
        converted = convert_value(value, descriptor.resolve_inferred_type())
    except ConversionError as e:
        # Conversion messages quote the raw value
        if descriptor.is_secret:
            message = f"Cannot convert value to {e.target_type}"
        else:
            message = e.message
    else:
        message = check_value(descriptor, key, converted)
        if message is None:
            return None

    display_value = REDACTED if descriptor.is_secret else value
    return f"{key}={display_value}: {message}"


def validate(
    schema: SchemaDocument | Mapping[str, Any],
    env_vars: Mapping[str, Any],
    ci_mode: bool = False,
    system_vars: Iterable[str] = (),
) -> ValidationReport:
    """
    Validate environment variables against a schema.

    Args:
        schema: Loaded SchemaDocument or raw schema data
        env_vars: Variable name -> raw value
        ci_mode: Report undeclared variables as warnings
        system_vars: Additional ambient names/prefixes to ignore

    Returns:
        ValidationReport; ``success`` is False when any error was found

    Raises:
        MalformedSchemaError: If raw schema data is not a valid schema
    """
    document = schema if isinstance(schema, SchemaDocument) else parse_schema(schema)

    errors: list[str] = []
    warnings: list[str] = []
    validated_count = 0

    for key in document.required:
        if _is_unset(env_vars.get(key)):
            errors.append(f"Missing required environment variable: {key}")

    for key, descriptor in document.properties.items():
        value = env_vars.get(key)
        if _is_unset(value):
            continue

        error = check_variable(key, value, descriptor)
        if error is None:
            validated_count += 1
        elif not ci_mode and is_warning_only(descriptor, error):
            warnings.append(error)
        else:
            errors.append(error)

    if document.additional_properties is False and ci_mode:
        for key in env_vars:
            if key in document.properties or key.startswith("_"):
                continue
            if is_system_env_var(key, system_vars):
                continue
            warnings.append(f"Unexpected environment variable: {key} (not defined in schema)")

    return ValidationReport(
        success=not errors,
        errors=errors,
        warnings=warnings,
        validated_count=validated_count,
        total_variables=len(document.properties),
    )


def validate_env(
    schema_path: str | Path = DEFAULT_SCHEMA_PATH,
    env_vars: Mapping[str, Any] | None = None,
    ci_mode: bool = False,
    quiet: bool = False,
    system_vars: Iterable[str] = (),
) -> ValidationReport:
    """
    Load a schema file and validate environment variables against it.

    ``env_vars`` defaults to a snapshot of ``os.environ`` taken at call time.

    Raises:
        SchemaNotFoundError: If the schema file does not exist
        MalformedSchemaError: If the schema file is invalid
    """
    document = load_schema(schema_path)
    variables = dict(os.environ) if env_vars is None else env_vars

    report = validate(document, variables, ci_mode=ci_mode, system_vars=system_vars)
    logger.debug(
        f"Validated {report.validated_count}/{report.total_variables} variables "
        f"({len(report.errors)} errors, {len(report.warnings)} warnings)"
    )

    if not quiet and report.warnings:
        for warning in report.warnings:
            logger.warning(warning)
    return report


def validate_single_var(
    key: str, value: Any, schema: SchemaDocument | Mapping[str, Any]
) -> tuple[bool, str | None]:
    """
    Validate one variable. Keys the schema does not declare are valid.

    Returns:
        (valid, error) where error is a ``KEY=value: message`` line or None
    """
    document = schema if isinstance(schema, SchemaDocument) else parse_schema(schema)
    descriptor = document.properties.get(key)
    if descriptor is None:
        return True, None

    error = check_variable(key, value, descriptor)
    return error is None, error


def quick_validate(
    schema_path: str | Path = DEFAULT_SCHEMA_PATH, env_vars: Mapping[str, Any] | None = None
) -> bool:
    """True when validation succeeds; any failure, fatal ones included, is False."""
    try:
        return validate_env(schema_path, env_vars, quiet=True).success
    except DotenvShieldError as e:
        logger.debug(f"Quick validation failed: {e}")
        return False

"""
Schema Builder
==============

Turns parsed ``.env`` entries into a schema document and an example document.

``build_schema`` is the pure core: it never touches the file system.
``generate_schema`` wraps it with the file pipeline (read source, scan code,
load the previous schema for merging, back up, write).

Merge rules for a key present in both the source and the previous schema:
    - description and non-core ``_meta`` keys come from the previous schema
    - originalType, isSecret and detectedInCode are recomputed
    - a hand-set ``type`` that differs from the inferred one is kept, together
      with its constraints, and originalType is re-derived to match it
    - a per-property ``required`` boolean overrides code detection
"""

from datetime import datetime, timezone
import json
from pathlib import Path
from typing import Any, Iterable, Mapping

from ..config.constants import GENERATOR_NAME, GENERATOR_VERSION, JSON_SCHEMA_DIALECT
from ..config.settings import ShieldSettings
from ..core.classifier import is_secret_key
from ..core.errors import EmptyInputError, SchemaError
from ..core.inference import PORT_MAX, PORT_MIN, InferredType, infer_type, is_port_value
from ..io.files import create_backup, read_env_file, read_schema_data, write_text_atomic
from ..io.scanner import detect_env_usage
from ..logging import get_logger
from .envelope import wrap
from .example import example_value, placeholder_value, render_example
from .models import (
    FORMAT_MAP,
    GenerationResult,
    GenerationStats,
    dump_structural_type,
    inferred_type_from_structure,
    structural_type_for,
)

logger = get_logger("Generate")

EMPTY_SOURCE_MESSAGE = "No environment variables found in .env file"

CONSTRAINT_KEYS = ("format", "minimum", "maximum", "minLength")
# Always recomputed from the current value, even when merging
COMPUTED_META_KEYS = ("originalType", "isSecret", "detectedInCode")


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-05-01T12:00:00.000Z"""
    moment = now or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def _is_negative(digits: str) -> bool:
    return digits.startswith("-") and digits.lstrip("-0") != ""


def type_constraints(inferred: InferredType, value: str) -> dict[str, Any]:
    """Constraints derived from the inferred type and the sample value."""
    constraints: dict[str, Any] = {}

    if inferred is InferredType.INTEGER:
        if is_port_value(value):
            constraints["minimum"] = PORT_MIN
            constraints["maximum"] = PORT_MAX
        elif not _is_negative(value.strip()):
            constraints["minimum"] = 0
    elif inferred in FORMAT_MAP:
        constraints["format"] = FORMAT_MAP[inferred]
    elif inferred is InferredType.STRING and value:
        constraints["minLength"] = 1

    return constraints


def describe_variable(key: str, value: str, detected_in_code: bool) -> dict[str, Any]:
    """Freshly inferred descriptor for one variable."""
    inferred = infer_type(value)
    return {
        "type": dump_structural_type(structural_type_for(inferred)),
        "description": f"{key} environment variable",
        **type_constraints(inferred, value),
        "_meta": {
            "inferred": True,
            "originalType": inferred.value,
            "isSecret": is_secret_key(key),
            "detectedInCode": detected_in_code,
        },
    }


def _original_type_for(structural: Any, fmt: Any, hinted: Any) -> str:
    """An originalType consistent with a hand-set structural type."""
    if hinted:
        try:
            if dump_structural_type(structural_type_for(hinted)) == structural:
                return InferredType(hinted).value
        except ValueError:
            pass
    return inferred_type_from_structure(structural, fmt).value


def merge_descriptor(fresh: dict[str, Any], prior: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay the human-editable parts of ``prior`` onto ``fresh``."""
    prior_meta = prior.get("_meta") if isinstance(prior.get("_meta"), dict) else {}
    prior_type = prior.get("type")
    type_overridden = prior_type is not None and prior_type != fresh["type"]

    merged: dict[str, Any] = {"type": prior_type if type_overridden else fresh["type"]}
    merged["description"] = prior.get("description") or fresh["description"]

    constraint_source = prior if type_overridden else fresh
    for key in CONSTRAINT_KEYS:
        if key in constraint_source:
            merged[key] = constraint_source[key]

    # Hand-added keys (required, enum, default, ...) survive regeneration
    for key, value in prior.items():
        if key not in merged and key not in CONSTRAINT_KEYS and key != "_meta":
            merged[key] = value

    meta = dict(fresh["_meta"])
    for key, value in prior_meta.items():
        if key not in COMPUTED_META_KEYS:
            meta[key] = value
    if type_overridden:
        meta["originalType"] = _original_type_for(
            prior_type, prior.get("format"), prior_meta.get("originalType")
        )
    merged["_meta"] = meta
    return merged


def new_schema_document(generated_at: str) -> dict[str, Any]:
    return {
        "$schema": JSON_SCHEMA_DIALECT,
        "title": "Environment Variables Schema",
        "description": "Auto-generated schema for environment variables",
        "type": "object",
        "properties": {},
        "required": [],
        "additionalProperties": False,
        "_meta": {
            "generated": generated_at,
            "generator": GENERATOR_NAME,
            "version": GENERATOR_VERSION,
        },
    }


def build_schema(
    env_entries: Mapping[str, str],
    detected_vars: Iterable[str] = (),
    existing: Mapping[str, Any] | None = None,
    now: datetime | None = None,
) -> GenerationResult:
    """
    Build a schema document and example entries from parsed ``.env`` entries.

    Args:
        env_entries: Ordered variable name -> raw value
        detected_vars: Names found by code scanning; these are marked required
        existing: Previous schema document; passing one enables merge mode
        now: Generation time (default: current UTC time)

    Returns:
        GenerationResult with the document, example entries and counts

    Raises:
        EmptyInputError: If ``env_entries`` is empty
    """
    if not env_entries:
        raise EmptyInputError(EMPTY_SOURCE_MESSAGE)

    detected = set(detected_vars)
    existing = existing or {}
    prior_properties = existing.get("properties")
    if not isinstance(prior_properties, dict):
        prior_properties = {}
    prior_required = existing.get("required")
    prior_required = set(prior_required) if isinstance(prior_required, list) else set()

    document = new_schema_document(utc_timestamp(now))
    properties: dict[str, Any] = document["properties"]
    required: list[str] = []
    example: dict[str, str] = {}
    secret_count = 0

    for key, value in env_entries.items():
        in_code = key in detected
        descriptor = describe_variable(key, value, in_code)
        prior = prior_properties.get(key)

        is_required = in_code
        if isinstance(prior, dict):
            descriptor = merge_descriptor(descriptor, prior)
            if isinstance(prior.get("required"), bool):
                is_required = prior["required"]

        properties[key] = descriptor
        if is_required or key in prior_required:
            required.append(key)

        meta = descriptor["_meta"]
        example[key] = example_value(key, value, meta["originalType"])
        if meta["isSecret"]:
            secret_count += 1
        logger.debug(f"{key}: {meta['originalType']} -> {descriptor['type']}")

    # Variables only the previous schema knows about are kept as they were
    for key, prior in prior_properties.items():
        if key in properties:
            continue
        properties[key] = prior
        if key in prior_required:
            required.append(key)
        prior_meta = prior.get("_meta") if isinstance(prior, dict) else None
        is_secret = bool(prior_meta.get("isSecret")) if isinstance(prior_meta, dict) else False
        example[key] = placeholder_value(key, is_secret)

    document["required"] = list(dict.fromkeys(required))

    return GenerationResult(
        schema_document=document,
        example=example,
        stats=GenerationStats(
            total_vars=len(env_entries),
            required_vars=len(document["required"]),
            detected_vars=len(detected),
            secret_vars=secret_count,
        ),
    )


def serialize_schema(document: Mapping[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def generate_schema(
    env_path: str | Path = ".env",
    schema_path: str | Path = ".env.schema.json",
    example_path: str | Path = ".env.example",
    detect_required: bool = True,
    merge: bool = False,
    cwd: str | Path | None = None,
    settings: ShieldSettings | None = None,
) -> GenerationResult:
    """
    Generate schema and example files from a ``.env`` file.

    Nothing is written when the source has no variables. In merge mode the
    previous schema is backed up first and the new document is written between
    the marker lines, keeping any text outside them.

    Raises:
        EmptyInputError: If the source file defines no variables
    """
    settings = settings or ShieldSettings()
    schema_file = Path(schema_path)
    example_file = Path(example_path)

    entries = read_env_file(env_path)
    if not entries:
        raise EmptyInputError(EMPTY_SOURCE_MESSAGE, details={"env_path": str(env_path)})

    detected: list[str] = []
    if detect_required:
        logger.info("Scanning code for environment variable usage...")
        detected = detect_env_usage(cwd, settings.scan_extensions, settings.scan_exclude_dirs)
        logger.info(f"Found {len(detected)} variables used in code")

    existing_content: str | None = None
    existing: dict[str, Any] | None = None
    if merge and schema_file.exists():
        existing_content = schema_file.read_text(encoding="utf-8")
        try:
            existing = read_schema_data(schema_file)
        except SchemaError as e:
            logger.warning(f"Could not parse existing schema, creating new one: {e}")

    result = build_schema(entries, detected, existing)

    backup_path = None
    if merge and schema_file.exists():
        backup_path = create_backup(schema_file)

    schema_json = serialize_schema(result.schema_document)
    if merge:
        write_text_atomic(schema_file, wrap(schema_json, existing_content))
    else:
        write_text_atomic(schema_file, schema_json + "\n")

    generated_at = result.schema_document["_meta"]["generated"]
    write_text_atomic(example_file, render_example(result.example, generated_at))

    logger.debug(
        f"Wrote {schema_file} and {example_file} "
        f"({result.stats.total_vars} variables, {result.stats.required_vars} required)"
    )

    result.schema_path = str(schema_file)
    result.example_path = str(example_file)
    result.backup_path = str(backup_path) if backup_path else None
    return result

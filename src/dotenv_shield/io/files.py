"""
File-system collaborator: dotenv sources, schema files, atomic writes and
timestamped backups.
"""

import json
import os
from pathlib import Path
import shutil
import tempfile
import time
from typing import Any

from dotenv import dotenv_values

from ..core.errors import MalformedSchemaError, SchemaNotFoundError
from ..logging import get_logger
from ..schema.envelope import unwrap

logger = get_logger("Files")


def read_env_file(path: str | Path) -> dict[str, str]:
    """
    Parse a dotenv file into an ordered mapping.

    Keys declared without a value (``KEY`` or ``KEY=``) map to an empty string.
    """
    values = dotenv_values(path)
    return {key: "" if value is None else str(value) for key, value in values.items()}


def read_schema_data(path: str | Path) -> dict[str, Any]:
    """
    Read a schema file into a plain dict, stripping the marker envelope.

    Raises:
        SchemaNotFoundError: If the file does not exist
        MalformedSchemaError: If the content is not a JSON object
    """
    schema_path = Path(path)
    if not schema_path.exists():
        raise SchemaNotFoundError(f"Schema file not found: {schema_path}")

    content = schema_path.read_text(encoding="utf-8")
    try:
        data = json.loads(unwrap(content))
    except json.JSONDecodeError as e:
        raise MalformedSchemaError(f"Invalid JSON in schema file: {e}") from e

    if not isinstance(data, dict):
        raise MalformedSchemaError("Invalid schema: top level must be a JSON object")
    return data


def write_text_atomic(path: str | Path, content: str) -> None:
    """Write through a temp file in the same directory, then replace."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(prefix=f"{target.name}.", dir=str(target.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_path, target)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)


def create_backup(path: str | Path) -> Path | None:
    """Copy ``path`` to ``<path>.backup.<epoch-ms>``. Returns None if absent."""
    source = Path(path)
    if not source.exists():
        return None

    backup_path = source.with_name(f"{source.name}.backup.{int(time.time() * 1000)}")
    shutil.copy2(source, backup_path)
    logger.debug(f"Backed up {source} to {backup_path}")
    return backup_path

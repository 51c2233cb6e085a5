"""
Tool settings.

Layered the same way every time: built-in defaults, then an optional
``dotenv-shield.yaml`` in the project root, then ``DOTENV_SHIELD_*`` variables
from the process environment. CLI flags override all three.
"""

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from ..core.errors import ConfigurationError
from .constants import (
    DEFAULT_ENV_PATH,
    DEFAULT_EXAMPLE_PATH,
    DEFAULT_SCHEMA_PATH,
    SCAN_EXCLUDE_DIRS,
    SCAN_EXTENSIONS,
    SETTINGS_FILENAME,
)

ENV_OVERRIDES = {
    "DOTENV_SHIELD_ENV": "env_path",
    "DOTENV_SHIELD_SCHEMA": "schema_path",
    "DOTENV_SHIELD_EXAMPLE": "example_path",
    "DOTENV_SHIELD_LOG_LEVEL": "log_level",
}

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ShieldSettings(BaseModel):
    env_path: str = DEFAULT_ENV_PATH
    schema_path: str = DEFAULT_SCHEMA_PATH
    example_path: str = DEFAULT_EXAMPLE_PATH
    detect_required: bool = True
    log_level: str = "INFO"
    scan_extensions: list[str] = Field(default_factory=lambda: list(SCAN_EXTENSIONS))
    scan_exclude_dirs: list[str] = Field(default_factory=lambda: list(SCAN_EXCLUDE_DIRS))
    extra_system_vars: list[str] = Field(default_factory=list)
    model_config = ConfigDict(extra="ignore")

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}")
        return level


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"YAML parsing error in {path}: {e!s}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping")
    return data


def load_settings(
    project_root: str | Path | None = None,
    environ: dict[str, str] | None = None,
) -> ShieldSettings:
    """
    Load settings for a project.

    Args:
        project_root: Directory holding ``dotenv-shield.yaml`` (default: cwd)
        environ: Environment mapping for overrides (default: ``os.environ``)

    Raises:
        ConfigurationError: If the settings file is unreadable or invalid
    """
    root = Path(project_root) if project_root is not None else Path.cwd()
    env = os.environ if environ is None else environ

    raw = _read_yaml(root / SETTINGS_FILENAME)
    for env_key, field_name in ENV_OVERRIDES.items():
        value = env.get(env_key)
        if value:
            raw[field_name] = value.strip()

    try:
        return ShieldSettings.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError("Settings validation failed", details={"errors": e.errors()}) from e

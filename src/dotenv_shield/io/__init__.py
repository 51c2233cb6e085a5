"""File-system and code-scanning collaborators."""

from .files import create_backup, read_env_file, read_schema_data, write_text_atomic
from .scanner import detect_env_usage, find_env_references

__all__ = [
    "create_backup",
    "read_env_file",
    "read_schema_data",
    "write_text_atomic",
    "detect_env_usage",
    "find_env_references",
]

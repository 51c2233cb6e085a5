"""
Code-scanning collaborator.

Sweeps a source tree for literal environment lookups and returns the variable
names it finds. This is a regex pass, not an analysis: dynamic lookups such as
``os.environ[name]`` are not detected.
"""

import os
from pathlib import Path
import re
from typing import Iterable

from ..config.constants import SCAN_EXCLUDE_DIRS, SCAN_EXTENSIONS
from ..logging import get_logger

logger = get_logger("Scanner")

_NAME = r"([A-Z_][A-Z0-9_]*)"

ENV_USAGE_PATTERNS = [
    # JavaScript / TypeScript
    re.compile(rf"process\.env\.{_NAME}"),
    re.compile(rf"process\.env\[\s*['\"]{_NAME}['\"]\s*\]"),
    # Python
    re.compile(rf"os\.environ\[\s*['\"]{_NAME}['\"]\s*\]"),
    re.compile(rf"os\.environ\.get\(\s*['\"]{_NAME}['\"]"),
    re.compile(rf"os\.getenv\(\s*['\"]{_NAME}['\"]"),
]


def _iter_source_files(
    root: Path, extensions: Iterable[str], exclude_dirs: Iterable[str]
) -> Iterable[Path]:
    suffixes = {ext.lower() for ext in extensions}
    excluded = set(exclude_dirs)
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [name for name in dirnames if name not in excluded]
        for filename in filenames:
            path = Path(dirpath) / filename
            if path.suffix.lower() in suffixes:
                yield path


def find_env_references(text: str) -> set[str]:
    """Variable names referenced literally in one source text."""
    names: set[str] = set()
    for pattern in ENV_USAGE_PATTERNS:
        names.update(match.group(1) for match in pattern.finditer(text))
    return names


def detect_env_usage(
    cwd: str | Path | None = None,
    extensions: Iterable[str] | None = None,
    exclude_dirs: Iterable[str] | None = None,
) -> list[str]:
    """
    Scan source files under ``cwd`` for environment variable usage.

    Unreadable files are skipped. If the sweep itself fails the result is an
    empty list and a warning is logged, so generation can continue.

    Returns:
        Sorted, de-duplicated variable names
    """
    root = Path(cwd) if cwd is not None else Path.cwd()
    found: set[str] = set()

    try:
        for path in _iter_source_files(
            root, extensions or SCAN_EXTENSIONS, exclude_dirs or SCAN_EXCLUDE_DIRS
        ):
            try:
                text = path.read_text(encoding="utf-8", errors="ignore")
            except OSError:
                continue
            found.update(find_env_references(text))
    except Exception as e:
        logger.warning(f"Could not scan code files for env usage: {e}")
        return []

    return sorted(found)

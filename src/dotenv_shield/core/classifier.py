"""Heuristic secret detection by variable name."""

import re

# Any single match marks the key as secret. There is no allow-list, so names
# like PUBLIC_KEY_ID are flagged too.
SECRET_PATTERNS = [
    re.compile(r"password", re.IGNORECASE),
    re.compile(r"secret", re.IGNORECASE),
    re.compile(r"token", re.IGNORECASE),
    re.compile(r"key$", re.IGNORECASE),
    re.compile(r"^api_key", re.IGNORECASE),
    re.compile(r"auth", re.IGNORECASE),
    re.compile(r"private", re.IGNORECASE),
    re.compile(r"credential", re.IGNORECASE),
    re.compile(r"_key$", re.IGNORECASE),
    re.compile(r"_secret$", re.IGNORECASE),
    re.compile(r"_token$", re.IGNORECASE),
    re.compile(r"jwt", re.IGNORECASE),
    re.compile(r"bearer", re.IGNORECASE),
]


def is_secret_key(key: str) -> bool:
    """Check if a variable name suggests it holds a secret."""
    return any(pattern.search(key) for pattern in SECRET_PATTERNS)

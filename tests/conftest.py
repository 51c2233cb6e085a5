import os
from pathlib import Path
from typing import Callable, Generator
from unittest.mock import patch

import pytest

SAMPLE_ENV = """\
PORT=3000
DEBUG=true
DATABASE_URL=postgres://localhost/test
API_KEY=secret123
MAX_CONNECTIONS=10
CONFIG={"timeout": 30}
ADMIN_EMAIL=admin@example.com
"""


@pytest.fixture(scope="session", autouse=True)
def isolated_env() -> Generator[None, None, None]:
    """
    Strip dotenv-shield settings overrides from the environment for the whole
    session so a developer's shell cannot change test outcomes.
    """
    env_vars = {k: v for k, v in os.environ.items() if not k.startswith("DOTENV_SHIELD_")}
    with patch.dict(os.environ, env_vars, clear=True):
        yield


@pytest.fixture
def sample_entries() -> dict[str, str]:
    return {
        "PORT": "3000",
        "DEBUG": "true",
        "DATABASE_URL": "postgres://localhost/test",
        "API_KEY": "secret123",
        "MAX_CONNECTIONS": "10",
        "CONFIG": '{"timeout": 30}',
        "ADMIN_EMAIL": "admin@example.com",
    }


@pytest.fixture
def write_env(tmp_path: Path) -> Callable[[str], Path]:
    """Write a .env file into tmp_path and return its path."""

    def _write(content: str = SAMPLE_ENV, name: str = ".env") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write

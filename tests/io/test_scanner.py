"""
Tests for code scanning.
"""

from pathlib import Path
from unittest.mock import patch

from dotenv_shield.io import scanner
from dotenv_shield.io.scanner import detect_env_usage, find_env_references


def write(root: Path, relative: str, content: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class TestFindEnvReferences:
    def test_javascript_patterns(self):
        text = "const a = process.env.DATABASE_URL;\nconst b = process.env['API_KEY'];"
        assert find_env_references(text) == {"DATABASE_URL", "API_KEY"}

    def test_python_patterns(self):
        text = (
            'port = os.environ["PORT"]\n'
            "debug = os.environ.get('DEBUG', 'false')\n"
            'secret = os.getenv("SECRET_KEY")\n'
        )
        assert find_env_references(text) == {"PORT", "DEBUG", "SECRET_KEY"}

    def test_dynamic_lookup_not_detected(self):
        assert find_env_references("os.environ[name]\nprocess.env[key]") == set()


class TestDetectEnvUsage:
    def test_scans_tree(self, tmp_path: Path):
        write(tmp_path, "src/app.js", "process.env.PORT; process.env.API_URL")
        write(tmp_path, "settings.py", 'os.getenv("PORT")')
        write(tmp_path, "README.md", "process.env.NOT_SCANNED")

        assert detect_env_usage(tmp_path) == ["API_URL", "PORT"]

    def test_skips_excluded_directories(self, tmp_path: Path):
        write(tmp_path, "node_modules/lib/index.js", "process.env.VENDOR_ONLY")
        write(tmp_path, "dist/bundle.js", "process.env.BUILD_ONLY")
        write(tmp_path, "index.ts", "process.env.APP_NAME")

        assert detect_env_usage(tmp_path) == ["APP_NAME"]

    def test_custom_extensions(self, tmp_path: Path):
        write(tmp_path, "app.py", 'os.getenv("PY_ONLY")')
        write(tmp_path, "app.js", "process.env.JS_ONLY")

        assert detect_env_usage(tmp_path, extensions=[".js"]) == ["JS_ONLY"]

    def test_no_source_files(self, tmp_path: Path):
        assert detect_env_usage(tmp_path) == []

    def test_sweep_failure_returns_empty(self, tmp_path: Path):
        write(tmp_path, "app.js", "process.env.PORT")

        with patch.object(scanner, "_iter_source_files", side_effect=PermissionError("denied")):
            assert detect_env_usage(tmp_path) == []

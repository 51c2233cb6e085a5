#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Constants for dotenv-shield
"""

GENERATOR_NAME = "dotenv-shield"
GENERATOR_VERSION = "1.0.0"
JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"

# Default file locations, relative to the working directory
DEFAULT_ENV_PATH = ".env"
DEFAULT_SCHEMA_PATH = ".env.schema.json"
DEFAULT_EXAMPLE_PATH = ".env.example"
SETTINGS_FILENAME = "dotenv-shield.yaml"

# Sentinel lines around the machine-owned region of a merged schema file
MARKER_START = "// dotenv-shield:start"
MARKER_END = "// dotenv-shield:end"

REDACTED = "[REDACTED]"

# Example values for secret-classified keys, by inferred type
SECRET_PLACEHOLDERS = {
    "string": "your-secret-here",
    "integer": "***",
    "number": "***",
    "port": "***",
    "boolean": "true",
    "url": "https://your-secret-url.com",
    "email": "your-email@example.com",
    "json": '{"secret": "value"}',
}
DEFAULT_SECRET_PLACEHOLDER = "your-secret-here"

# Non-secret plain strings longer than this are truncated in the example file
EXAMPLE_STRING_MAX = 20

# Ambient shell, platform and CI variables ignored when reporting undeclared
# names. Each entry matches exactly or as a prefix.
SYSTEM_ENV_VARS = [
    "PATH",
    "HOME",
    "USER",
    "SHELL",
    "TERM",
    "PWD",
    "OLDPWD",
    "NODE_ENV",
    "NODE_PATH",
    "NODE_OPTIONS",
    "npm_package_name",
    "npm_package_version",
    "npm_config_",
    "CI",
    "GITHUB_",
    "TRAVIS_",
    "CIRCLE_",
    "JENKINS_",
]

# Code scanning
SCAN_EXTENSIONS = [".py", ".js", ".ts", ".jsx", ".tsx", ".mjs", ".cjs"]
SCAN_EXCLUDE_DIRS = [
    "node_modules",
    "dist",
    "build",
    "coverage",
    ".git",
    ".venv",
    "venv",
    "__pycache__",
]

#!/usr/bin/env python
"""
dotenv-shield command-line interface.

Commands:
    generate   Generate .env.schema.json and .env.example from a .env file
    validate   Validate environment variables against a schema
    check      Quick check, exit code only

Exit code is 0 on success and 1 on any validation error or fatal condition.
"""

import argparse
import json
import os
from pathlib import Path
import sys

from .config.constants import GENERATOR_NAME, GENERATOR_VERSION
from .config.settings import ShieldSettings, load_settings
from .core.errors import DotenvShieldError
from .io.files import read_env_file
from .logging import configure_logging, get_logger, shutdown_logging
from .schema.builder import generate_schema
from .validation import ValidationReport, validate_env

logger = get_logger("CLI")


def _setup_logging(level: str, console_output: bool = True) -> None:
    shutdown_logging()
    configure_logging(console_output=console_output, log_level=level)


def cmd_generate(args: argparse.Namespace, settings: ShieldSettings) -> int:
    """Generate schema and example files"""
    env_path = Path(args.env or settings.env_path).resolve()
    schema_path = Path(args.schema or settings.schema_path).resolve()
    example_path = Path(args.example or settings.example_path).resolve()

    if not env_path.exists():
        logger.error(f"Error: .env file not found at {env_path}")
        return 1

    logger.info(f"Generating schema from {env_path}")
    try:
        result = generate_schema(
            env_path=env_path,
            schema_path=schema_path,
            example_path=example_path,
            detect_required=settings.detect_required and not args.no_detect,
            merge=args.merge,
            cwd=args.cwd,
            settings=settings,
        )
    except DotenvShieldError as e:
        logger.error(f"Error generating schema: {e}")
        return 1

    logger.success("Schema generated successfully!")
    logger.info(f"Schema: {schema_path}")
    logger.info(f"Example: {example_path}")
    if result.backup_path:
        logger.info(f"Backup: {result.backup_path}")
    logger.info(
        f"Found {result.stats.total_vars} variables, {result.stats.required_vars} required, "
        f"{result.stats.secret_vars} secret"
    )
    return 0


def _collect_env(env_file: str | None) -> dict[str, str]:
    """Process environment plus an optional .env file that never overrides it."""
    env_vars = dict(os.environ)
    if env_file:
        env_path = Path(env_file).resolve()
        if env_path.exists():
            for key, value in read_env_file(env_path).items():
                env_vars.setdefault(key, value)
        else:
            logger.debug(f"Env file {env_path} not found, skipping preload")
    return env_vars


def _print_json(report: ValidationReport) -> None:
    print(json.dumps(report.to_json_dict()))


def cmd_validate(args: argparse.Namespace, settings: ShieldSettings) -> int:
    """Validate environment variables against the schema"""
    schema_path = Path(args.schema or settings.schema_path).resolve()

    if not schema_path.exists():
        if args.json:
            _print_json(
                ValidationReport(success=False, errors=[f"Schema file not found: {schema_path}"])
            )
        else:
            logger.error(f"Error: Schema file not found at {schema_path}")
            logger.info(f'Run "{GENERATOR_NAME} generate" first to create a schema.')
        return 1

    if not args.quiet and not args.json:
        logger.info("Validating environment variables...")

    try:
        report = validate_env(
            schema_path=schema_path,
            env_vars=_collect_env(args.env),
            ci_mode=args.ci,
            quiet=args.quiet or args.json,
            system_vars=settings.extra_system_vars,
        )
    except DotenvShieldError as e:
        if args.json:
            _print_json(ValidationReport(success=False, errors=[str(e)]))
        else:
            logger.error(f"Error validating environment: {e}")
        return 1

    if args.json:
        _print_json(report)
        return 0 if report.success else 1

    if report.success:
        if not args.quiet:
            logger.success("All environment variables are valid!")
            logger.info(f"Validated {report.validated_count} variables")
        return 0

    logger.error("Environment validation failed:")
    for error in report.errors:
        logger.error(f"  • {error}")
    return 1


def cmd_check(args: argparse.Namespace, settings: ShieldSettings) -> int:
    """Quick check - exit code only"""
    schema_path = Path(args.schema or settings.schema_path).resolve()
    try:
        report = validate_env(
            schema_path=schema_path, quiet=True, system_vars=settings.extra_system_vars
        )
    except DotenvShieldError:
        return 1
    return 0 if report.success else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=GENERATOR_NAME,
        description="Auto-generate .env schema and validate environment variables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {GENERATOR_VERSION}")
    parser.add_argument("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")

    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser(
        "generate", help="Generate .env.schema.json and .env.example from .env file"
    )
    generate.add_argument("-e", "--env", help="Path to .env file (default: .env)")
    generate.add_argument(
        "-s", "--schema", help="Output path for schema file (default: .env.schema.json)"
    )
    generate.add_argument(
        "-x", "--example", help="Output path for example file (default: .env.example)"
    )
    generate.add_argument(
        "--no-detect",
        action="store_true",
        help="Skip auto-detection of required variables from code",
    )
    generate.add_argument(
        "--merge", action="store_true", help="Merge with existing schema (preserve manual edits)"
    )
    generate.add_argument(
        "--cwd", default=os.getcwd(), help="Working directory to scan for code files"
    )
    generate.set_defaults(handler=cmd_generate)

    validate = subparsers.add_parser(
        "validate", help="Validate environment variables against schema"
    )
    validate.add_argument("-s", "--schema", help="Path to schema file (default: .env.schema.json)")
    validate.add_argument("-e", "--env", help="Path to .env file to load (optional)")
    validate.add_argument("--ci", action="store_true", help="CI mode - stricter validation")
    validate.add_argument("--quiet", action="store_true", help="Suppress success messages")
    validate.add_argument("--json", action="store_true", help="Output JSON result to stdout")
    validate.set_defaults(handler=cmd_validate)

    check = subparsers.add_parser("check", help="Quick check - validate without detailed output")
    check.add_argument("-s", "--schema", help="Path to schema file (default: .env.schema.json)")
    check.set_defaults(handler=cmd_check)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    silent = args.command == "check" or getattr(args, "json", False)
    try:
        settings = load_settings()
    except DotenvShieldError as e:
        if getattr(args, "json", False):
            _print_json(ValidationReport(success=False, errors=[str(e)]))
        _setup_logging("INFO", console_output=not silent)
        logger.error(f"Invalid {GENERATOR_NAME} settings: {e}")
        shutdown_logging()
        return 1

    _setup_logging(args.log_level or settings.log_level, console_output=not silent)
    try:
        return args.handler(args, settings)
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())

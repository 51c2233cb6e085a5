"""
Unified Logging System for dotenv-shield
========================================

- Unified format: [Module] Symbol [LEVEL] Message
- Color-coded console output
- Optional file output

Usage:
    from dotenv_shield.logging import get_logger

    logger = get_logger("Generate")
    logger.info("Processing started")
    logger.success("Schema written")
"""

from .logger import (
    ConsoleFormatter,
    ConsoleHandler,
    FileFormatter,
    Logger,
    LogLevel,
    configure_logging,
    get_logger,
    reset_logger,
    shutdown_logging,
)

__all__ = [
    "Logger",
    "LogLevel",
    "get_logger",
    "reset_logger",
    "configure_logging",
    "shutdown_logging",
    "ConsoleFormatter",
    "ConsoleHandler",
    "FileFormatter",
]

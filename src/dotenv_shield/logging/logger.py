"""
Core Logger Implementation
==========================

Unified logging with consistent format across all modules.
Format: [Module] Symbol [LEVEL] Message

Implementation uses a non-blocking QueueHandler. Callers push LogRecords to a
queue, and a listener thread handles the actual I/O (console output, log file).

Logging is configured once at startup via configure_logging(). All subsequent
get_logger() calls share the same listener and output handlers.

Example outputs:
    [Generate]     ● [INFO]    Scanning code for environment variable usage...
    [Validate]     ✓ [SUCCESS] All environment variables are valid!
    [Validate]     ✗ [ERROR]   PORT=not-a-number: Cannot convert "not-a-number" to integer
"""

import atexit
from datetime import datetime
from enum import Enum
import logging
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import Queue
import sys

# Bounded to prevent unbounded growth when the listener is stopped
_log_queue: Queue = Queue(maxsize=10000)
_listener: QueueListener | None = None
_configured: bool = False
_lazy_configured: bool = False


def configure_logging(
    console_output: bool = True,
    file_output: bool = False,
    log_level: str = "INFO",
    log_dir: str | Path | None = None,
) -> None:
    """Configure logging once at application startup.

    Args:
        console_output: Enable console output (stdout)
        file_output: Enable file output (to log_dir)
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Log directory (default: ./logs)

    Raises:
        RuntimeError: If called more than once
    """
    global _listener, _configured, _lazy_configured

    # Allow configuration if it was previously only lazy-configured
    if _configured and not _lazy_configured:
        raise RuntimeError("configure_logging() already called. Cannot reconfigure.")

    if _listener is not None:
        _listener.stop()
        _listener = None

    level = getattr(logging, log_level.upper(), logging.INFO)
    handlers: list[logging.Handler] = []

    if console_output:
        console_handler = ConsoleHandler(level)
        handlers.append(console_handler)

    if file_output:
        log_dir_path = Path(log_dir) if log_dir is not None else Path.cwd() / "logs"
        log_dir_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d")
        log_file = log_dir_path / f"dotenv_shield_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # Log everything to file
        file_handler.setFormatter(FileFormatter())
        handlers.append(file_handler)

    if not handlers:
        # Keep draining the queue so silenced records are not replayed later
        handlers.append(logging.NullHandler())

    _listener = QueueListener(_log_queue, *handlers, respect_handler_level=True)
    _listener.start()

    _configured = True
    _lazy_configured = False


def _ensure_configured() -> None:
    """Apply console defaults when nothing has configured logging yet."""
    global _lazy_configured
    if not _configured:
        configure_logging()
        _lazy_configured = True


def shutdown_logging() -> None:
    """Flush and stop the listener. Registered with atexit."""
    global _listener, _configured, _lazy_configured
    if _listener is not None:
        _listener.stop()
        _listener = None
    _configured = False
    _lazy_configured = False


atexit.register(shutdown_logging)


class LogLevel(Enum):
    """Log levels with standard tags"""

    DEBUG = "DEBUG"
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ConsoleFormatter(logging.Formatter):
    """
    Console formatter with colors and standard level tags.
    Format: [Module]  Symbol [LEVEL]  Message
    """

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[90m",  # Gray
        "INFO": "\033[37m",  # White
        "SUCCESS": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    SYMBOLS = {
        "DEBUG": "·",
        "INFO": "●",
        "SUCCESS": "✓",
        "WARNING": "⚠",
        "ERROR": "✗",
        "CRITICAL": "✗",
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def __init__(self):
        super().__init__()
        self.use_colors = hasattr(sys.stdout, "isatty") and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        module = getattr(record, "module_name", record.name)
        module_tag = f"[{module}]".ljust(14)
        display_level = getattr(record, "display_level", record.levelname)
        level_tag = f"[{display_level}]".ljust(10)
        symbol = getattr(record, "symbol", self.SYMBOLS.get(display_level, "●"))

        if self.use_colors:
            color = self.COLORS.get(display_level, self.COLORS["INFO"])
            dim = self.DIM
            reset = self.RESET
        else:
            color = dim = reset = ""

        return (
            f"{dim}{module_tag}{reset} "
            f"{color}{symbol}{reset} "
            f"{color}{level_tag}{reset} {record.getMessage()}"
        )


class ConsoleHandler(logging.StreamHandler):
    """
    Console handler with color-coded output.

    Writes to whatever sys.stdout is at emit time, so redirected or captured
    streams keep working after configuration.
    """

    def __init__(self, level: int = logging.INFO):
        super().__init__(sys.stdout)
        self.setLevel(level)
        self.setFormatter(ConsoleFormatter())

    @property
    def stream(self):
        return sys.stdout

    @stream.setter
    def stream(self, value):
        pass


class FileFormatter(logging.Formatter):
    """
    Detailed file formatter for log files.
    Format: TIMESTAMP [LEVEL] [Module] Message
    """

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)-8s] [%(module_name)-12s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "module_name"):
            record.module_name = record.name
        return super().format(record)


class Logger:
    """
    Unified logger for dotenv-shield.

    Usage:
        logger = Logger("Generate")
        logger.info("Scanning...")
        logger.success("Schema generated")
        logger.section("Validation Result")
    """

    def __init__(self, name: str, level: str = "DEBUG"):
        """Initialize logger.

        Args:
            name: Module name (e.g., "Generate", "Validate", "CLI")
            level: Minimum level forwarded to the shared queue

        Raises:
            RuntimeError: If logging not configured via configure_logging()
        """
        if not _configured:
            raise RuntimeError(
                f"Logger({name}): logging not configured. Call configure_logging() "
                "at startup before creating loggers."
            )

        self.name = name
        self.level = getattr(logging, level.upper(), logging.DEBUG)

        self.logger = logging.getLogger(f"dotenv_shield.{name}")
        self.logger.setLevel(logging.DEBUG)  # Capture all, filter at handlers
        self.logger.handlers.clear()

        queue_handler = QueueHandler(_log_queue)
        queue_handler.setLevel(self.level)
        self.logger.addHandler(queue_handler)

    def _log(
        self,
        level: int,
        message: str,
        *args: object,
        display_level: str | None = None,
        symbol: str | None = None,
        **kwargs: object,
    ):
        """Internal logging method with extra attributes."""
        _ensure_configured()
        display = display_level or logging.getLevelName(level)
        extra = {
            "module_name": self.name,
            "symbol": symbol or ConsoleFormatter.SYMBOLS.get(display, "●"),
            "display_level": display,
        }
        self.logger.log(
            level,
            message,
            *args,
            extra=extra,
            exc_info=kwargs.get("exc_info", False),
            stacklevel=kwargs.get("stacklevel", 1) + 2,
        )

    def debug(self, message: str, *args: object, **kwargs: object):
        """Debug level log [DEBUG]"""
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args: object, **kwargs: object):
        """Info level log [INFO]"""
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args: object, **kwargs: object):
        """Warning level log [WARNING]"""
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args: object, **kwargs: object):
        """Error level log [ERROR]"""
        self._log(logging.ERROR, message, *args, **kwargs)

    def exception(self, message: str, *args: object, **kwargs: object):
        """Log exception with traceback"""
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, message, *args, display_level="ERROR", **kwargs)

    def success(self, message: str, *args: object, **kwargs: object):
        """Success log with checkmark (✓)"""
        self._log(logging.INFO, message, *args, symbol="✓", display_level="SUCCESS", **kwargs)

    def section(self, title: str, char: str = "=", length: int = 60):
        """Print a section header"""
        self.info(char * length)
        self.info(title)
        self.info(char * length)


# Global logger registry - key is (name, level)
_loggers: dict[tuple[str, str], Logger] = {}


def get_logger(name: str = "Main", level: str = "DEBUG") -> Logger:
    """
    Get or create a logger instance.

    If logging has not been configured via configure_logging(), console
    defaults are applied lazily and may be replaced by a later explicit call.
    """
    cache_key = (name, level)
    if cache_key not in _loggers:
        _ensure_configured()
        _loggers[cache_key] = Logger(name=name, level=level)
    return _loggers[cache_key]


def reset_logger(name: str | None = None):
    """
    Reset logger(s).

    Args:
        name: Logger name to reset, or None to reset all
    """
    if name is None:
        keys_to_remove = list(_loggers.keys())
    else:
        keys_to_remove = [key for key in _loggers if key[0] == name]

    for key in keys_to_remove:
        _loggers.pop(key, None)

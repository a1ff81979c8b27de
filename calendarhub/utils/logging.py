"""Logging configuration and setup utilities."""

import logging
import logging.handlers
import os
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from calendarhub.config.settings import CalendarHubSettings

# Custom log level between INFO(20) and DEBUG(10)
VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

ROOT_LOGGER_NAME = "calendarhub"
THIRD_PARTY_LOGGERS = ("aiohttp", "asyncio")

# Correlation id of the HTTP request being handled, if any
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def _log_verbose(self: logging.Logger, msg: Any, *args: Any, **kwargs: Any) -> None:
    if self.isEnabledFor(VERBOSE):
        self._log(VERBOSE, msg, args, **kwargs)


# logger.verbose("...") on every Logger, like logger.debug
logging.Logger.verbose = _log_verbose  # type: ignore[attr-defined]


def get_log_level(level_name: str) -> int:
    """Numeric level for a name such as "info" or "VERBOSE".

    Raises:
        AttributeError: If the name is not a logging level
    """
    name = level_name.upper()
    return VERBOSE if name == "VERBOSE" else int(getattr(logging, name))


class AutoColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name when stderr is a color terminal.

    ``color_mode`` is ``"bright"`` (high-intensity ANSI colors), ``"basic"``
    (the 8 standard colors) or ``"none"``.
    """

    # Standard ANSI foreground codes; bright variants are these plus 60
    LEVEL_CODES = {
        "DEBUG": 35,
        "VERBOSE": 32,
        "INFO": 34,
        "WARNING": 33,
        "ERROR": 31,
        "CRITICAL": 31,
    }
    BOLD_LEVELS = frozenset({"CRITICAL"})
    RESET = "\033[0m"

    def __init__(self, *args: Any, enable_colors: bool = True, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.color_mode = detect_color_mode() if enable_colors else "none"

    def _color_for(self, level_name: str) -> str:
        code = self.LEVEL_CODES[level_name]
        if self.color_mode == "bright":
            code += 60
        bold = "\033[1m" if level_name in self.BOLD_LEVELS else ""
        return f"\033[{code}m{bold}"

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        if self.color_mode == "none" or record.levelname not in self.LEVEL_CODES:
            return formatted

        colored = f"{self._color_for(record.levelname)}{record.levelname}{self.RESET}"
        return formatted.replace(record.levelname, colored, 1)


def detect_color_mode() -> str:
    """Pick a color mode from stderr and the TERM/COLORTERM variables."""
    if not sys.stderr.isatty():
        return "none"

    term = os.environ.get("TERM", "").lower()
    if not term or term == "dumb":
        return "none"
    if os.environ.get("COLORTERM", "").lower() in ("truecolor", "24bit") or "256color" in term:
        return "bright"
    return "basic" if "color" in term else "none"


class CorrelationIdFilter(logging.Filter):
    """Add the current request's correlation id to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


def setup_logging(settings: "CalendarHubSettings") -> logging.Logger:
    """Configure the ``calendarhub`` logger from settings.

    Returns:
        Configured package logger
    """
    log_settings = settings.logging

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)  # Allow all levels, handlers will filter
    logger.handlers.clear()

    correlation_filter = CorrelationIdFilter()

    if log_settings.console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(get_log_level(log_settings.console_level))
        console_handler.setFormatter(
            AutoColoredFormatter(
                "%(asctime)s - %(levelname)s - [%(request_id)s] %(name)s - %(message)s",
                datefmt="%H:%M:%S",
                enable_colors=log_settings.console_colors,
            )
        )
        console_handler.addFilter(correlation_filter)
        logger.addHandler(console_handler)

    if log_settings.file_enabled:
        log_dir = (
            Path(log_settings.file_directory)
            if log_settings.file_directory
            else settings.data_dir / "logs"
        )
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / f"{log_settings.file_prefix}.log"

        # Use rotating file handler to prevent large log files
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=log_settings.max_log_files,
            encoding="utf-8",
        )
        file_handler.setLevel(get_log_level(log_settings.file_level))
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] "
                "%(funcName)s:%(lineno)d - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        file_handler.addFilter(correlation_filter)
        logger.addHandler(file_handler)
        logger.info("Logging to file: %s", log_path)

    third_party_level = get_log_level(log_settings.third_party_level)
    for lib in THIRD_PARTY_LOGGERS:
        logging.getLogger(lib).setLevel(third_party_level)

    logger.debug("Logging initialized at %s level", log_settings.console_level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``calendarhub.`` namespace.

    Example:
        >>> logger = get_logger("web.server")
        >>> logger.info("Server started")
    """
    if name.startswith(f"{ROOT_LOGGER_NAME}.") or name == ROOT_LOGGER_NAME:
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def apply_command_line_overrides(
    settings: "CalendarHubSettings", args: Any
) -> "CalendarHubSettings":
    """Apply command-line logging overrides to settings in place.

    Priority: Command-line > Environment > YAML > Defaults.
    """
    if getattr(args, "log_level", None):
        settings.logging.console_level = args.log_level
        settings.logging.file_level = args.log_level

    if getattr(args, "verbose", False):
        settings.logging.console_level = "VERBOSE"
        settings.logging.file_level = "VERBOSE"

    if getattr(args, "quiet", False):
        settings.logging.console_level = "ERROR"

    if getattr(args, "log_dir", None):
        settings.logging.file_enabled = True
        settings.logging.file_directory = str(args.log_dir)

    if getattr(args, "no_log_colors", False):
        settings.logging.console_colors = False

    return settings

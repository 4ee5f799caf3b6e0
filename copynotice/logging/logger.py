"""
copynotice Structured Logging

Provides JSON-formatted structured logging for all copynotice components.
Every log entry includes timestamp, level, logger name, and message.

Console progress for the user goes through copynotice.console; the logger
carries the machine-readable record of the same run. Module loggers propagate
to the package logger ``copynotice``, which owns the only handler, so a YAML
dictConfig can replace it wholesale.
"""

import logging
import logging.config
import json
import os
from datetime import datetime, timezone
from typing import Optional

import yaml

PACKAGE_LOGGER = "copynotice"
LOG_LEVEL_ENV = "COPYNOTICE_LOG_LEVEL"


class StructuredFormatter(logging.Formatter):
    """Custom formatter that outputs JSON-structured log entries"""

    def __init__(self, component: str = "copynotice"):
        super().__init__()
        self.component = component

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "component": self.component,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add any extra fields from the record
        if hasattr(record, 'extra_fields'):
            log_data.update(record.extra_fields)

        return json.dumps(log_data)


def default_level() -> int:
    """Level named by COPYNOTICE_LOG_LEVEL, WARNING when unset or unknown."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.WARNING


def get_logger(name: str, component: str = "copynotice", level: Optional[int] = None) -> logging.Logger:
    """
    Get a structured logger for a copynotice component.

    The first call installs a stderr handler with StructuredFormatter on the
    package logger; later calls reuse it.

    Args:
        name: Logger name (typically module name)
        component: Component name written into every record
        level: Logging level (default: from COPYNOTICE_LOG_LEVEL, else WARNING)

    Returns:
        Logger instance under the ``copynotice`` hierarchy

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("File rewritten", extra={'extra_fields': {'path': 'out/a.h'}})
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    # Only configure if not already configured
    if not package_logger.handlers:
        if level is None:
            level = default_level()
        package_logger.setLevel(level)

        # stderr, so console output on stdout stays clean
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(StructuredFormatter(component))

        package_logger.addHandler(console_handler)

        # Prevent propagation to root logger
        package_logger.propagate = False

    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def set_level(level: int) -> None:
    """Apply `level` to the package logger and its handlers."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setLevel(level)


def configure_logging(config_path: Optional[str] = None, default_level: int = logging.WARNING) -> bool:
    """
    Configure logging from a YAML file. Falls back to basicConfig on failure.

    Args:
        config_path: Path to YAML logging config
        default_level: Default log level for fallback config

    Returns:
        True if YAML config loaded, False otherwise
    """
    if config_path and os.path.isfile(config_path):
        try:
            with open(config_path, "r", encoding="utf-8") as handle:
                config = yaml.safe_load(handle)

            if not config:
                raise ValueError("Logging config is empty")

            for handler in config.get("handlers", {}).values():
                filename = handler.get("filename")
                if filename and os.path.dirname(filename):
                    os.makedirs(os.path.dirname(filename), exist_ok=True)

            logging.config.dictConfig(config)
            return True
        except (OSError, ValueError, TypeError, yaml.YAMLError):
            logging.basicConfig(level=default_level)
            return False

    logging.basicConfig(level=default_level)
    return False

"""Structured logging configuration."""

import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

# Context every record carries; pipeline runs bind real values
DEFAULT_CONTEXT = {"run_id": "-", "niche": "-"}

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[run_id]}</magenta> | <cyan>{name}</cyan>:<cyan>{line}</cyan> | <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[run_id]} | {name}:{function}:{line} | {message}"


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Replace all loguru sinks with a console sink and an optional rotating file.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path to a log file, e.g. one per batch of shorts
        rotation: Log rotation size
        retention: Log retention period
    """
    handlers = [
        {"sink": sys.stderr, "format": CONSOLE_FORMAT, "level": log_level.upper(), "colorize": True},
    ]

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            {
                "sink": log_file,
                "format": FILE_FORMAT,
                "level": log_level.upper(),
                "rotation": rotation,
                "retention": retention,
                "compression": "zip",
                "encoding": "utf-8",
            }
        )

    logger.configure(handlers=handlers, extra=DEFAULT_CONTEXT)


def get_logger(name: str, **context: Any) -> Any:
    """
    Get a logger bound to a module name and optional run context.

    Args:
        name: Logger name (typically __name__)
        **context: Context fields such as run_id, niche or stage

    Returns:
        Logger instance with bound context
    """
    return logger.bind(name=name, **context)


setup_logging()

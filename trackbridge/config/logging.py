"""Logging configuration and utilities using Loguru.

This module provides centralized logging setup for trackbridge, including
structured logging with Loguru and an error handling decorator for external
API calls.

Public API:
----------
setup_loguru_logger(verbose: bool = False, config: LoggingConfig | None = None) -> list[int]
    Install console and JSON file sinks; returns their handler ids

get_logger(name: str) -> Logger
    Get a context-aware logger for your module
    Args: name - Usually __name__ from the calling module
    Usage: logger = get_logger(__name__)

@resilient_operation(operation_name: str)
    Decorator for external API calls: logs the failure, then re-raises it
    Usage: @resilient_operation("lavalink_load_tracks")
"""

from functools import wraps
from pathlib import Path
import sys
from typing import Any

from loguru import logger

from .settings import LoggingConfig, settings

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================


def setup_loguru_logger(
    verbose: bool = False, config: LoggingConfig | None = None
) -> list[int]:
    """Replace Loguru's default handler with console and JSON file sinks.

    Args:
        verbose: Force DEBUG on the console and include variable values in
            console tracebacks
        config: Levels and file location; defaults to settings.logging

    Returns:
        Handler ids of the console and file sinks, in that order
    """
    config = config or settings.logging
    logger.remove()

    log_file_path = Path(config.log_file)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    logger.configure(extra={"service": "trackbridge", "module": "root"})

    console_id = logger.add(
        sink=sys.stdout,
        level="DEBUG" if verbose else config.console_level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[module]}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=verbose,
        diagnose=verbose,
    )

    # One JSON object per line; rotated by size
    file_id = logger.add(
        sink=str(log_file_path),
        level=config.file_level,
        rotation="10 MB",
        retention="1 week",
        backtrace=True,
        diagnose=False,  # no variable values: secrets live in locals
        enqueue=True,
        serialize=True,
    )
    return [console_id, file_id]


# =============================================================================
# LOGGER FACTORY
# =============================================================================


def get_logger(name: str) -> Any:  # Use Any for Loguru logger type
    """Get a pre-configured logger instance for the given module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Loguru logger bound with module and service context

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("Resolved track", query="ytsearch: Artist - Song")
        ```
    """
    return logger.bind(
        module=name,
        service="trackbridge",
    )


# =============================================================================
# ERROR HANDLING DECORATORS
# =============================================================================


def resilient_operation(operation_name=None):
    """Decorator for service boundary operations with standardized error logging.

    The wrapped coroutine's exceptions are logged with their traceback and
    re-raised unchanged, so transport failures still reach the caller.

    Args:
        operation_name: Optional name for the operation (defaults to function name)

    Example:
        >>> @resilient_operation("spotify_album_tracks")
        >>> async def get_album_tracks(album_id):
        >>>     return await fetch(album_id)
    """

    def decorator(func):
        op_name = operation_name or func.__name__

        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                logger.opt(exception=e).error(f"Error in {op_name}: {e!s}")
                raise

        return wrapper

    return decorator

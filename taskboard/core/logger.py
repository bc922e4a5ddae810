"""
Centralized logging configuration using Loguru.
Follows Single Responsibility Principle - only handles logging setup.
"""

import sys
from pathlib import Path

from loguru import logger

_configured = False

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logger() -> None:
    """Configure logger handlers. Only configures once per process."""
    global _configured

    if _configured:
        return

    from .config import get_settings

    settings = get_settings()

    # LOG_LEVEL takes precedence over DEBUG flag
    if settings.log_level:
        log_level = settings.log_level.upper()
        if log_level not in LOG_LEVELS:
            log_level = "INFO"
    else:
        log_level = "DEBUG" if settings.debug else "INFO"

    logger.remove()

    def filter_reloader_logs(record):
        """Filter out logs from __main__ and __mp_main__ (reloader processes)."""
        return record.get("name", "") not in ("__main__", "__mp_main__")

    # Console handler with color
    logger.add(
        sys.stdout,
        colorize=True,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=log_level,
        filter=filter_reloader_logs,
    )

    if settings.log_to_file:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        # File handler for all logs - always DEBUG level to capture everything
        logger.add(
            log_dir / "app.log",
            rotation="100 MB",
            retention="30 days",
            compression="zip",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level="DEBUG",
        )

        # Error file handler
        logger.add(
            log_dir / "error.log",
            rotation="100 MB",
            retention="30 days",
            compression="zip",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level="ERROR",
        )

    _configured = True


def format_exception_short(exc: BaseException, context: str = "") -> str:
    """
    Render an exception as a single line: "<context>: <Type>: <message>".

    Args:
        exc: Exception to format
        context: Optional prefix describing where it happened

    Returns:
        One-line error description
    """
    detail = f"{type(exc).__name__}: {exc}"
    return f"{context}: {detail}" if context else detail


# Configure logger on module import
setup_logger()

__all__ = ["logger", "setup_logger", "format_exception_short"]

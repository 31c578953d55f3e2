"""
utils/logger.py
───────────────
Loguru-based logger configured once and imported across the project.

Every record carries a ``component`` extra ("app" unless bound). Modules
take a bound logger with ``get_logger("engine")``, ``get_logger("store")``
or ``get_logger("api")`` so the console line and the JSON file both say
which layer spoke. The engine logs ranking summaries at DEBUG; the profile
store and the API log at INFO.
"""

import sys
from pathlib import Path

from loguru import logger

from config.settings import get_settings

DEFAULT_COMPONENT = "app"


def setup_logger() -> None:
    settings = get_settings()
    log_file: Path = settings.log_file
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.configure(extra={"component": DEFAULT_COMPONENT})

    # Console: one readable line, component first
    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<magenta>{extra[component]: <6}</magenta> | "
            "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    # File: JSON lines, one record per event
    logger.add(
        str(log_file),
        level="DEBUG",
        rotation="10 MB",
        retention="14 days",
        serialize=True,
    )


def get_logger(component: str):
    """Logger whose records carry ``extra["component"] == component``."""
    return logger.bind(component=component)


setup_logger()

__all__ = ["DEFAULT_COMPONENT", "get_logger", "logger", "setup_logger"]

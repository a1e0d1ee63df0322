"""Loguru setup shared by the dashboard, the store and the scripts."""

from __future__ import annotations

import sys
from functools import lru_cache

from loguru import logger as loguru_logger

from .settings import Settings, load_settings

_LOGGING_CONFIGURED = False


def setup_logging(settings: Settings | None = None) -> None:
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    config = settings or load_settings()

    loguru_logger.remove()
    loguru_logger.configure(extra={"component": "-"})
    format_text = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[component]}</cyan> | "
        "{message}"
    )
    loguru_logger.add(
        sys.stderr,
        level=config.log_level,
        format=format_text,
        backtrace=True,
        diagnose=False,
    )

    if config.log_path:
        path = config.log_path
        path.parent.mkdir(parents=True, exist_ok=True)
        loguru_logger.add(
            str(path),
            level=config.log_level,
            format=format_text,
            backtrace=True,
            diagnose=False,
            rotation="5 MB",
            retention="14 days",
        )

    _LOGGING_CONFIGURED = True


@lru_cache(maxsize=None)
def get_logger(component: str = "expense_dashboard"):
    setup_logging()
    return loguru_logger.bind(component=component)

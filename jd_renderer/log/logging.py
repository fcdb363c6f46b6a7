"""
Loguru configuration shared by the whole service.

Import ``logger`` from here rather than from loguru directly so that every
module logs through the same sinks.
"""

import sys

from loguru import logger

from jd_renderer.core.config import settings

DEV_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "{extra[app_name]} | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def configure_logging(app_name: str, log_level: str = "INFO", json_logs: bool = False) -> None:
    """
    (Re)configure the global loguru logger.

    Args:
        app_name: Name bound to every record as ``extra.app_name``.
        log_level: Minimum level emitted.
        json_logs: Emit one JSON document per record instead of the dev format.
    """
    logger.remove()
    logger.configure(extra={"app_name": app_name})
    if json_logs:
        logger.add(sys.stderr, level=log_level, serialize=True, enqueue=False)
    else:
        logger.add(sys.stderr, level=log_level, format=DEV_FORMAT, colorize=True)


configure_logging(**settings.logging_config)

__all__ = ["logger", "configure_logging"]

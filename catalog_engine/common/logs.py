"""
Logging setup for the catalog engine.

Entry points call ensure_logging() so CATALOG_LOG_LEVEL applies even when
the host application never calls configure_logging() itself.
"""

import sys
from typing import Optional

from loguru import logger

from catalog_engine.common.config import log_level_from_env

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"

_configured = False


def configure_logging(level: Optional[str] = None, sink=None) -> int:
    """
    Replace loguru's default handler with a single sink.

    Args:
        level: Minimum level to emit. Defaults to CATALOG_LOG_LEVEL.
        sink: Any loguru sink. Defaults to stderr.

    Returns:
        The loguru handler id of the new sink.
    """
    global _configured

    if level is None:
        level = log_level_from_env()
    logger.remove()
    handler_id = logger.add(
        sink if sink is not None else sys.stderr,
        level=level.upper(),
        format=LOG_FORMAT,
    )
    _configured = True
    return handler_id


def ensure_logging() -> None:
    """Apply CATALOG_LOG_LEVEL on first use unless logging was already configured."""
    if not _configured:
        configure_logging()


def reset_logging() -> None:
    """Restore loguru's default stderr handler and forget any configuration."""
    global _configured

    logger.remove()
    logger.add(sys.stderr)
    _configured = False

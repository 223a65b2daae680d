"""Logging infrastructure.

Basic usage:
    from gramps.infra.logging import setup_logging
    import logging

    setup_logging()  # reads LOG_* settings, safe to call repeatedly
    logger = logging.getLogger(__name__)
    logger.info("Schema ready")
"""

from gramps.infra.logging.config import (
    build_logging_config,
    configure_logging,
    setup_logging,
)
from gramps.infra.logging.formatters import JSONFormatter

__all__ = [
    "JSONFormatter",
    "build_logging_config",
    "configure_logging",
    "setup_logging",
]

"""Logging configuration setup.

Configures the root logger once through ``logging.config.dictConfig``.
Application loggers (``logging.getLogger(__name__)``) carry no handlers of
their own and propagate to the root.
"""

from __future__ import annotations

import logging
import logging.config
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gramps.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    settings_obj = log_settings
    if settings_obj is None:
        from gramps.core.settings import get_logging_settings

        settings_obj = get_logging_settings()

    log_config = settings_obj.to_logging_kwargs()
    if configure_kwargs:
        log_config = {**log_config, **configure_kwargs}

    configure_logging(**log_config)
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    console_enabled: bool = True,
    capture_warnings: bool = True,
    service_name: str = "gramps",
    **kwargs: Any,
) -> None:
    """Configure the root logger with dictConfig.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_logs: Emit JSON Lines instead of human-readable text.
        console_enabled: Attach a stderr handler.
        capture_warnings: Forward Python warnings to logging.
        service_name: Static ``service`` field added to JSON records.
        **kwargs: Ignored extra settings.

    Example:
        configure_logging(log_level="DEBUG", json_logs=True)
    """
    if kwargs:
        logger.debug("Unused logging kwargs supplied: %s", ", ".join(sorted(kwargs.keys())))

    logging.captureWarnings(capture_warnings)
    logging.config.dictConfig(
        build_logging_config(
            log_level=log_level,
            json_logs=json_logs,
            console_enabled=console_enabled,
            service_name=service_name,
        )
    )


def build_logging_config(
    log_level: str,
    json_logs: bool,
    console_enabled: bool,
    service_name: str,
) -> dict[str, Any]:
    """Build the dictConfig mapping.

    Returns:
        Logging configuration dict for logging.config.dictConfig.
    """
    formatters: dict[str, Any] = {
        "text": {"format": TEXT_FORMAT},
        "json": {
            "()": "gramps.infra.logging.formatters.JSONFormatter",
            "static": {"service": service_name},
        },
    }

    handlers: dict[str, Any] = {}
    if console_enabled:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "formatter": "json" if json_logs else "text",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": handlers,
        "root": {
            "level": log_level.upper(),
            "handlers": list(handlers),
        },
        "loggers": {
            # uvicorn installs its own handlers; route them through root instead
            "uvicorn": {"handlers": [], "propagate": True},
            "uvicorn.access": {"handlers": [], "propagate": True},
        },
    }

"""CLI utilities for formatting output."""

from gramps.cli.utils.formatters import error, info, success, warning

__all__ = [
    "error",
    "info",
    "success",
    "warning",
]

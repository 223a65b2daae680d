"""Middleware for the gramps application."""

from __future__ import annotations

from gramps.app.middleware.gramps import GrampsMiddleware

__all__ = ["GrampsMiddleware"]

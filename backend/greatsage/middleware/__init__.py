"""Middleware package."""

from greatsage.middleware.logging import RequestContextMiddleware, configure_logging

__all__ = ["RequestContextMiddleware", "configure_logging"]

"""Middleware for URL shortener web app."""

from .canonical_host import CanonicalHostMiddleware
from .logging import LoggingMiddleware

__all__ = ["CanonicalHostMiddleware", "LoggingMiddleware"]

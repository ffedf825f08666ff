"""Common utilities for URL shortener."""

from .validators import is_valid_url, parse_duration
from .auth import hash_token, verify_token
from .url_builder import build_canonical_host, build_short_url, redirect_body
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "parse_duration",
    "hash_token",
    "verify_token",
    "build_canonical_host",
    "build_short_url",
    "redirect_body",
    "setup_logging",
    "get_logger",
]

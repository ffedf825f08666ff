"""Validation utilities for URL shortener."""

import re
from datetime import timedelta
from urllib.parse import urlparse
from typing import Tuple


# Units accepted in duration strings, in microseconds
_DURATION_UNITS = {
    "ns": 0.001,
    "us": 1,
    "µs": 1,
    "ms": 1_000,
    "s": 1_000_000,
    "m": 60_000_000,
    "h": 3_600_000_000,
}

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")

# Longest representable duration, in nanoseconds (signed 64-bit)
_MAX_DURATION_NS = 2**63 - 1


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL.
    
    Args:
        url: The URL to validate
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "url is required"
    
    if len(url) > 2048:
        return False, "url is too long (max 2048 characters)"
    
    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"invalid url format: {e}"
    
    if result.scheme not in ["http", "https"]:
        return False, "url must use http or https protocol"
    
    if not result.netloc:
        return False, "url must have a valid domain"
    
    return True, ""


def parse_duration(value: str) -> timedelta:
    """Parse a duration string such as ``90s``, ``1h30m`` or ``12h0m0s``.
    
    The format is a sequence of decimal numbers, each with an optional
    fraction and a unit suffix (ns, us, ms, s, m, h). A bare ``0`` is
    accepted.
    
    Args:
        value: Duration string
        
    Returns:
        The parsed duration
        
    Raises:
        ValueError: If the string is not a valid duration
    """
    if not isinstance(value, str):
        raise ValueError("duration must be a string")
    
    text = value.strip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    
    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration {value!r}")
    
    micros = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if not match:
            raise ValueError(f"invalid duration {value!r}")
        number, unit = match.groups()
        micros += float(number) * _DURATION_UNITS[unit]
        pos = match.end()
    
    if micros * 1000 > _MAX_DURATION_NS:
        raise ValueError(f"duration {value!r} is out of range")
    
    try:
        return timedelta(microseconds=sign * micros)
    except OverflowError as e:
        raise ValueError(f"duration {value!r} is out of range") from e

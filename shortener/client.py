"""HTTP client for creating short URLs on a running server."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from urllib.parse import urlparse

import requests

from .exceptions import ClientError


def format_duration(ttl: timedelta) -> str:
    """Render a timedelta as a duration string the server accepts.

    Whole-second durations are rendered as ``12h0m0s``; sub-second ones
    fall back to milliseconds.

    Args:
        ttl: Duration to format

    Returns:
        Duration string, e.g. ``1h30m0s`` or ``500ms``
    """
    total_us = ttl // timedelta(microseconds=1)
    sign = "-" if total_us < 0 else ""
    total_us = abs(total_us)

    if total_us == 0:
        return "0s"
    if total_us % 1_000_000:
        return f"{sign}{total_us / 1000:g}ms"

    seconds = total_us // 1_000_000
    hours, rest = divmod(seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


@dataclass
class ShortURL:
    """A short URL returned by the server."""

    url: str
    original: str
    expires_at: Optional[datetime] = None

    def __str__(self) -> str:
        return self.url


class ShortenerClient:
    """Client for the ``/new`` endpoint."""

    def __init__(
        self,
        endpoint: str,
        token: str,
        insecure: bool = False,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize client.

        Args:
            endpoint: Full URL of the creation endpoint
            token: Secret token
            insecure: Skip TLS certificate verification
            timeout: Request timeout in seconds
            session: Optional requests session
            logger: Optional logger
        """
        self.endpoint = endpoint
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.verify = not insecure
        self.logger = logger or logging.getLogger(__name__)

    def new_short_url(self, url: str, ttl: timedelta) -> ShortURL:
        """Create a short URL.

        Args:
            url: The long URL
            ttl: How long the short URL stays valid

        Returns:
            The created short URL

        Raises:
            ClientError: If the URL is invalid or the server rejects the request
        """
        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise ClientError(f"invalid url: {url!r}")

        try:
            response = self.session.post(
                self.endpoint,
                data={"token": self.token, "url": url, "ttl": format_duration(ttl)},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ClientError(f"request failed: {e}") from e

        if response.status_code == 403:
            raise ClientError("forbidden: invalid token")

        try:
            body = response.json()
        except ValueError as e:
            raise ClientError(f"unexpected response (status {response.status_code})") from e

        if body.get("error"):
            raise ClientError(body["error"])

        short_url = body.get("short-url")
        if not short_url:
            raise ClientError(f"response did not include a short URL (status {response.status_code})")

        expires_at = None
        if body.get("expires"):
            expires_at = datetime.fromisoformat(body["expires"].replace("Z", "+00:00"))

        self.logger.debug(f"Created {short_url} for {url}")
        return ShortURL(url=short_url, original=url, expires_at=expires_at)

    def close(self) -> None:
        self.session.close()

"""URL building utilities for URL shortener."""

import html


def build_canonical_host(host: str, port: int = 443, scheme: str = "https") -> str:
    """Build the externally advertised base URL.
    
    The port is omitted when it is the default for the scheme.
    
    Args:
        host: Public hostname
        port: Public port
        scheme: URL scheme
        
    Returns:
        Base URL (e.g., https://example.com or https://example.com:8443)
    """
    default_port = 443 if scheme == "https" else 80
    if port == default_port:
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


def build_short_url(short_code: str, base_url: str) -> str:
    """Join the canonical host and a short code into a short URL."""
    return f"{base_url.rstrip('/')}/{short_code}"


def redirect_body(location: str) -> str:
    """HTML fallback body for user agents that do not follow redirects."""
    return f'<a href="{html.escape(location, quote=True)}">Redirecting...</a>'

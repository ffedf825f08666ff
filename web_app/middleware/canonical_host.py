"""Canonical host middleware."""

from typing import Callable, Iterable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import HTMLResponse

from shortener.common.logging_config import get_logger
from shortener.common.url_builder import redirect_body


class CanonicalHostMiddleware(BaseHTTPMiddleware):
    """Redirect requests made to any other hostname to the canonical host."""
    
    def __init__(
        self,
        app,
        host: str,
        port: int,
        base_url: str,
        exempt_paths: Optional[Iterable[str]] = None,
    ):
        """Initialize canonical host middleware.
        
        Args:
            app: ASGI application
            host: Accepted hostname
            port: Accepted port, matched as ``host:port``
            base_url: Canonical base URL used for redirects
            exempt_paths: Paths served on any host (e.g. health checks)
        """
        super().__init__(app)
        self.allowed_hosts = {host, f"{host}:{port}"}
        self.base_url = base_url.rstrip("/")
        self.exempt_paths = set(exempt_paths or ())
        self.logger = get_logger("web")
    
    async def dispatch(self, request: Request, call_next: Callable):
        """Redirect or pass the request through."""
        request_host = request.headers.get("host", "")
        
        if request_host in self.allowed_hosts or request.url.path in self.exempt_paths:
            return await call_next(request)
        
        target = self.base_url + request.url.path
        self.logger.info(f"Host {request_host!r} is not canonical, redirecting to {target}")
        return HTMLResponse(
            content=redirect_body(target),
            status_code=301,
            headers={"Location": target},
        )

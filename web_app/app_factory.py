"""FastAPI application factory."""

from fastapi import FastAPI

from .api import api_router
from .web import web_router
from .middleware.canonical_host import CanonicalHostMiddleware
from .middleware.logging import LoggingMiddleware


def create_app(
    store,
    service,
    config,
    reaper=None,
    lifespan=None,
) -> FastAPI:
    """Create and configure FastAPI application.
    
    Args:
        store: ExpiringStore instance shared with the reaper
        service: URLShortenerService wrapping ``store``
        config: Configuration instance
        reaper: Optional Reaper instance, reported by the health check
        lifespan: Optional lifespan context manager
        
    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        description="Private, self-hosted URL shortener with expiring links",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    
    # Store instances in app state for access in routes
    app.state.store = store
    app.state.service = service
    app.state.reaper = reaper
    app.state.config = config
    
    if config.enforce_canonical_host:
        app.add_middleware(
            CanonicalHostMiddleware,
            host=config.host,
            port=config.port,
            base_url=config.base_url,
            exempt_paths=["/api/health"],
        )
    app.add_middleware(LoggingMiddleware)
    
    # API routes first: the redirect route matches every path
    app.include_router(api_router, tags=["API"])
    app.include_router(web_router, tags=["Web"])
    
    return app

"""API routes implementation."""

from typing import Optional
from datetime import datetime, timezone

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import JSONResponse, Response

from .schemas import ShortenResponse, HealthResponse, ErrorResponse
from shortener.common.auth import verify_token
from shortener.common.logging_config import get_logger
from shortener.common.url_builder import build_short_url
from shortener.common.validators import parse_duration
from shortener.exceptions import StoreError

logger = get_logger("web")

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/new",
    status_code=status.HTTP_201_CREATED,
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        403: {"description": "Invalid token"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Create an expiring short URL. Requires the secret token.",
)
def create_short_url(
    request: Request,
    token: str = Form(""),
    url: str = Form(""),
    ttl: Optional[str] = Form(None),
):
    """Create a shortened URL.
    
    Runs in the threadpool, so the store lock never blocks the event loop.
    """
    service = request.app.state.service
    config = request.app.state.config
    
    if not verify_token(token, config.token_sha256):
        return Response(status_code=status.HTTP_403_FORBIDDEN)
    
    if not url:
        return _error(status.HTTP_400_BAD_REQUEST, "url is required")
    
    ttl_override = None
    if ttl:
        try:
            ttl_override = parse_duration(ttl)
        except ValueError as e:
            return _error(status.HTTP_400_BAD_REQUEST, str(e))
    
    try:
        result = service.create_short_url(original_url=url, ttl=ttl_override)
    except ValueError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except StoreError:
        logger.exception("Failed to create short URL")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal error")
    
    return ShortenResponse(
        short_url=build_short_url(result["short_code"], config.base_url),
        expires=result["expires_at"].isoformat(),
    )


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
def health_check(request: Request):
    """Health check endpoint for monitoring."""
    service = request.app.state.service
    reaper = request.app.state.reaper
    
    health = service.health_check()
    
    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        entries=health["entries"],
        reaper="running" if reaper is not None and reaper.running else "stopped",
        timestamp=datetime.now(timezone.utc),
    )


@router.api_route("/new", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
def create_short_url_wrong_method():
    """Only POST creates short URLs."""
    return Response(status_code=status.HTTP_405_METHOD_NOT_ALLOWED, headers={"Allow": "POST"})

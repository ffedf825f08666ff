"""Redirect routes implementation."""

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, Response

from shortener.identifiers import IdentifierGenerator
from shortener.common.url_builder import redirect_body

router = APIRouter()


@router.get("/", include_in_schema=False)
def index():
    """No identifier given."""
    return Response(status_code=status.HTTP_400_BAD_REQUEST)


@router.get("/{short_code:path}", include_in_schema=False)
def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL, or 404 if missing or expired."""
    service = request.app.state.service
    
    if not IdentifierGenerator.is_valid_format(short_code):
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    
    original_url = service.get_original_url(short_code)
    
    if not original_url:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    
    return HTMLResponse(
        content=redirect_body(original_url),
        status_code=status.HTTP_301_MOVED_PERMANENTLY,
        headers={"Location": original_url},
    )

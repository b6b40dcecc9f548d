import html
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse, HTMLResponse
from sqlalchemy.orm import Session
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..config import settings
from ..core.exceptions import InvalidCode, NotFound
from ..database import get_db
from ..schemas.link import LinkCreate, LinkResponse, MessageResponse
from ..services.links import LinkService
from ..services.resolver import RedirectResolver
from ..services.store import LinkStore

# Handlers stay sync so FastAPI runs them in its threadpool
router = APIRouter()
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}


def get_base_url(request: Request) -> str:
    """Configured public base URL, or the one the request came in on"""
    return settings.BASE_URL or str(request.base_url).rstrip("/")


def get_link_service(request: Request, db: Session = Depends(get_db)) -> LinkService:
    return LinkService(LinkStore(db), base_url=get_base_url(request))


def get_404_page() -> str:
    return """
    <!DOCTYPE html>
    <html><head><meta charset="UTF-8"><title>Link not found</title></head>
    <body style="font-family: Arial; text-align: center; padding: 50px;">
        <h1>404 - Link not found</h1>
        <p>The requested short link does not exist.</p>
    </body></html>
    """


@router.post("/links", response_model=LinkResponse, status_code=201)
@limiter.limit(settings.RATE_LIMIT_CREATE)
def create_link(
    request: Request,
    link_data: LinkCreate,
    service: LinkService = Depends(get_link_service)
):
    """
    Create a short link.

    Rate limited per client IP.
    """
    return service.create_link(link_data.long_url, link_data.code)


@router.get("/links", response_model=List[LinkResponse])
def list_links(service: LinkService = Depends(get_link_service)):
    """All links, newest first"""
    return service.list_links()


@router.get("/links/{code}", response_model=LinkResponse)
def get_link(code: str, service: LinkService = Depends(get_link_service)):
    return service.get_link(code)


@router.delete("/links/{code}", response_model=MessageResponse)
def delete_link(code: str, service: LinkService = Depends(get_link_service)):
    service.delete_link(code)
    return {"ok": True}


def redirect_to_url(code: str, db: Session = Depends(get_db)):
    """
    Redirect to the original URL from short code.

    Records the click before redirecting.
    """
    try:
        long_url = RedirectResolver(LinkStore(db)).resolve(code)
    except NotFound:
        return HTMLResponse(content=get_404_page(), status_code=404, headers=NO_CACHE_HEADERS)

    # 302 so every visit reaches us and is counted
    return RedirectResponse(url=long_url, status_code=302, headers=NO_CACHE_HEADERS)


def link_stats_page(code: str, service: LinkService = Depends(get_link_service)):
    """Read-only stats page for a link; does not count as a visit"""
    try:
        link = service.get_link(code)
    except (InvalidCode, NotFound):
        return HTMLResponse(content=get_404_page(), status_code=404)

    created = link.created_at.strftime("%Y-%m-%d %H:%M:%S") if link.created_at else ""
    last = link.last_clicked.strftime("%Y-%m-%d %H:%M:%S") if link.last_clicked else "never"
    short_url = html.escape(link.short_url)
    long_url = html.escape(link.long_url)

    return HTMLResponse(content=f"""
    <!DOCTYPE html>
    <html><head><meta charset="UTF-8"><title>Stats for {html.escape(link.code)}</title></head>
    <body style="font-family: Arial; padding: 50px;">
        <h1>{html.escape(link.code)}</h1>
        <p>Short URL: <a href="{short_url}">{short_url}</a></p>
        <p>Destination: <a href="{long_url}">{long_url}</a></p>
        <p>Clicks: {link.clicks}</p>
        <p>Last clicked: {last}</p>
        <p>Created: {created}</p>
    </body></html>
    """)

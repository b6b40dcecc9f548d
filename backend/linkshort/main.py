import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .database import engine, Base
from .api import links
from .api.links import limiter, redirect_to_url, link_stats_page
from .config import settings
from .core.exceptions import InvalidCode, InvalidUrl, LinkError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)
logger = logging.getLogger("linkshort")

# Create database tables
Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(
    title="Link Shortener",
    description="Short codes that redirect to long URLs, with click counting",
    version="1.0.0"
)

# Setup rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def link_error_handler(request: Request, exc: LinkError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


app.add_exception_handler(LinkError, link_error_handler)


FIELD_ERRORS = {
    "longUrl": InvalidUrl.detail,
    "code": InvalidCode.detail,
}


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the same 400 {"error": ...} shape as other bad input"""
    message = "Invalid request"
    for error in exc.errors():
        field = next((loc for loc in error.get("loc", ()) if loc in FIELD_ERRORS), None)
        if field:
            message = FIELD_ERRORS[field]
            break
    return JSONResponse(status_code=400, content={"error": message})


app.add_exception_handler(RequestValidationError, request_validation_handler)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(links.router, prefix="/api", tags=["links"])


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "Link Shortener"}


# Stats page (read-only, does not count clicks)
app.get("/code/{code}", include_in_schema=False)(link_stats_page)

# Redirect endpoint (must be last to not conflict with other routes)
app.get("/{code}", include_in_schema=False)(redirect_to_url)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

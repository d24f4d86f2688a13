"""FastAPI application entry point."""

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from idea_pool import __version__
from idea_pool.api import ideas, me, tokens, users
from idea_pool.api.errors import register_exception_handlers, unhandled_exception_handler
from idea_pool.cache import create_redis_client
from idea_pool.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

RESPONSE_HEADERS = {
    "Cache-Control": "private, must-revalidate, max-age=0",
    "Vary": "Accept-Encoding, Origin",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
}


def configure_logging() -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    configure_logging()
    app.state.redis = create_redis_client()
    logger.info(f"Idea Pool API v{__version__} starting ({settings.environment})")
    yield
    app.state.redis.close()


app = FastAPI(
    title="Idea Pool API",
    description="Rank ideas by Impact, Ease and Confidence",
    version=__version__,
    lifespan=lifespan,
)

register_exception_handlers(app)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def add_response_headers(request: Request, call_next):
    """Tag every response with a request id, timing and cache/security headers."""
    request_id = request.headers.get("X-Request-Id") or uuid.uuid4().hex
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as exc:
        response = await unhandled_exception_handler(request, exc)
    response.headers["X-Request-Id"] = request_id
    response.headers["X-Runtime"] = f"{time.perf_counter() - started:.6f}"
    for name, value in RESPONSE_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


# Register routers
app.include_router(users.router)
app.include_router(me.router)
app.include_router(tokens.router)
app.include_router(ideas.router)


@app.get("/")
async def index():
    """API banner."""
    return {"message": f"Idea Pool API v{__version__}"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}

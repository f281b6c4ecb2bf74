from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from contextlib import asynccontextmanager
from linkshelf import __version__
from linkshelf.api.errors import register_exception_handlers
from linkshelf.core.config import settings
from linkshelf.core.database import engine, Base
from linkshelf.core.logging_config import (
    setup_logging,
    CorrelationIdMiddleware,
    log_security_event,
)
from linkshelf.api.endpoints import auth, links, tags, search
import logging

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        # HTTP Strict Transport Security (HSTS)
        if settings.ENABLE_HSTS and settings.is_production:
            hsts_value = f"max-age={settings.HSTS_MAX_AGE}"
            if settings.HSTS_INCLUDE_SUBDOMAINS:
                hsts_value += "; includeSubDomains"
            response.headers["Strict-Transport-Security"] = hsts_value

        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"

        # Prevent clickjacking
        response.headers["X-Frame-Options"] = "DENY"

        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting linkshelf...")

    # Create any missing tables; schema changes go through alembic
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")

    log_security_event(
        event_type="app.startup",
        message=f"linkshelf starting (production={settings.is_production})",
        event_category="system",
        production=settings.is_production,
        debug=settings.DEBUG,
    )

    yield

    logger.info("Shutting down linkshelf...")


def create_app(use_lifespan: bool = True) -> FastAPI:
    """Build the application with middleware, error handlers and routers."""
    app = FastAPI(
        title="linkshelf - Personal Bookmark Manager",
        description="Save, tag and search links",
        version=__version__,
        lifespan=lifespan if use_lifespan else None,
    )

    register_exception_handlers(app)

    # Add correlation ID middleware (first, so all logs have correlation IDs)
    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(links.router, prefix="/api/links", tags=["links"])
    app.include_router(tags.router, prefix="/api/tags", tags=["tags"])
    app.include_router(search.router, prefix="/api/search", tags=["search"])

    @app.get("/")
    def root():
        return {
            "name": "linkshelf",
            "version": __version__,
            "description": "Personal Bookmark Manager",
        }

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


setup_logging(settings.LOG_LEVEL)
app = create_app()

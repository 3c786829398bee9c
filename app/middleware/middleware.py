# app/middleware/middleware.py
"""
Middleware and lifespan for the TripCraft backend.

The lifespan builds the long-lived clients once and parks them on
``app.state``; request handlers reach them through the dependencies in
``app.dependencies``.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.clients.ai_client import AiClient
from app.clients.memory_client import MemoryClient
from app.clients.protocols import DocumentStoreProtocol
from app.clients.supabase_client import SupabaseClient
from app.configs import file_logger, settings
from app.monitoring import bind_request_context, clear_context, configure_logging
from app.utils.helpers import get_summary, host

configure_logging()
logger = file_logger(getLogger(__name__))


def create_store() -> DocumentStoreProtocol:
    """Supabase when configured, otherwise the in-memory store."""
    if settings.SUPABASE_URL and settings.SUPABASE_SERVICE_ROLE_KEY:
        return SupabaseClient()
    logger.warning("Supabase is not configured, using the in-memory document store")
    return MemoryClient()


def create_ai_client() -> AiClient | None:
    """Gemini client when an API key is set; None makes generation return demo itineraries."""
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY is not set, itinerary generation will return demo plans")
        return None
    return AiClient()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown."""
    logger.info(f"Starting {app.title} ({settings.ENVIRONMENT})...")

    try:
        app.state.store = create_store()
        app.state.ai_client = create_ai_client()
        logger.info(f"Document store backend: {app.state.store.backend}")
        logger.info("Services initialized successfully")
        logger.info("  - API Documentation: http://localhost:8000/docs")
        logger.info("  - Health Check: http://localhost:8000/health")
    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    logger.info(f"Shutting down {app.title}...")
    try:
        if ai_client := app.state.ai_client:
            await ai_client.close()
        await app.state.store.close()
        logger.info("Services cleaned up successfully")
    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    allowed_origins: list[str] = [
        "http://localhost:5173",  # Vite development
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]

    if frontend_url := settings.PRODUCTION_FRONTEND_URL:
        allowed_origins.append(frontend_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request summary and timing, tagging every log line with a request id."""
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        bind_request_context(request_id=request_id)

        start_time = perf_counter()
        route_info = get_summary(request) or f"{request.method} {request.url.path}"
        logger.info(f"Request: {route_info}, from ip: {host(request)}")

        try:
            response = await call_next(request)
        finally:
            clear_context()

        duration = perf_counter() - start_time
        logger.info(
            f"Response: {response.status_code} for {request.method} {request.url.path} "
            f"in {duration:.2f}s",
        )
        response.headers["X-Request-ID"] = request_id
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response

# app/main.py

"""TripCraft Backend - itinerary generation, editing, sharing and comments."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.configs import settings
from app.errors import (
    AiError,
    CircuitBreakerError,
    ShareError,
    StoreError,
    ai_exception_handler,
    circuit_breaker_exception_handler,
    share_exception_handler,
    store_exception_handler,
    validation_exception_handler,
)
from app.managers import (
    ai_circuit_breaker,
    limiter,
    rate_limit_exceeded_handler,
    store_circuit_breaker,
)
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.routes import comments_router, itinerary_router, persona_router, share_router
from app.schemas import CircuitBreakerStatus, HealthCheckResponse, ServicesStatus
from app.utils.helpers import utc_now

app = FastAPI(
    title=settings.APP_NAME,
    description="Travel itinerary generation, editing and sharing API",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

routes = [
    itinerary_router,
    share_router,
    comments_router,
    persona_router,
]

_ = [app.include_router(router) for router in routes]

errors = [
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (CircuitBreakerError, circuit_breaker_exception_handler),
    (StoreError, store_exception_handler),
    (ShareError, share_exception_handler),
    (AiError, ai_exception_handler),
    (RequestValidationError, validation_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter
limiter: Limiter = app.state.limiter


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> ORJSONResponse:
    """
    Health check endpoint.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    ORJSONResponse
        Version, overall status, and the state of the completion client,
        the document store and both circuit breakers. ``status`` is
        ``degraded`` when the store does not answer its ping.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"version": "1.0.0", "status": "ok", "timestamp": "...", "services": { ... }}
    """
    state = request.app.state
    ai_client_status = "initialized" if getattr(state, "ai_client", None) else "demo_mode"

    store = getattr(state, "store", None)
    store_ok = bool(store) and await store.ping()
    store_status = f"{store.backend}:{'ok' if store_ok else 'unreachable'}" if store else "missing"

    services = ServicesStatus(
        ai_client=ai_client_status,
        store=store_status,
        ai_circuit_breaker=CircuitBreakerStatus(**ai_circuit_breaker.get_state()),
        store_circuit_breaker=CircuitBreakerStatus(**store_circuit_breaker.get_state()),
    )

    response = HealthCheckResponse(
        version=app.version,
        status="ok" if store_ok else "degraded",
        timestamp=utc_now().isoformat(),
        services=services,
    )
    return ORJSONResponse(response.model_dump())


@app.get("/", tags=["🏠 Root"], summary="Root access", response_model=dict[str, str])
@limiter.exempt
async def root(request: Request) -> ORJSONResponse:
    return ORJSONResponse(content={"message": f"Welcome to {settings.APP_NAME}"})

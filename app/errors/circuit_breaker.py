from logging import getLogger
from math import ceil

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class CircuitBreakerError(BaseAppError):
    """Raised instead of calling a dependency whose breaker is open."""

    def __init__(
        self,
        circuit_name: str,
        retry_after: float = 0.0,
        detail: str | None = None,
    ) -> None:
        super().__init__(
            detail or f"Service '{circuit_name}' temporarily unavailable",
            HTTP_503_SERVICE_UNAVAILABLE,
        )
        self.circuit_name = circuit_name
        self.retry_after = retry_after

    def __str__(self) -> str:
        if self.retry_after > 0:
            return f"{self.detail} (retry in {self.retry_after:.1f}s)"
        return self.detail


_render = create_exception_handler(logger)


async def circuit_breaker_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Render the 503 body and tell the client when the breaker may close."""
    response = await _render(request, exc)
    retry_after = getattr(exc, "retry_after", 0.0)
    if retry_after > 0:
        response.headers["Retry-After"] = str(ceil(retry_after))
    return response

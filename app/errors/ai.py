from collections.abc import Awaitable, Callable
from logging import getLogger

from fastapi.responses import ORJSONResponse
from starlette.requests import Request
from starlette.status import (
    HTTP_401_UNAUTHORIZED,
    HTTP_429_TOO_MANY_REQUESTS,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class AiError(BaseAppError):
    """Base exception for AI client errors."""

    def __init__(
        self,
        detail: str = "AI client error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail=detail, status_code=status_code)


class AiAuthenticationError(AiError):
    """Authentication failed or the API key is missing."""

    def __init__(self, detail: str = "AI authentication failed") -> None:
        super().__init__(detail, HTTP_401_UNAUTHORIZED)


class AiQuotaExceededError(AiError):
    """Quota exceeded."""

    def __init__(self, detail: str = "AI quota exceeded") -> None:
        super().__init__(detail, HTTP_429_TOO_MANY_REQUESTS)


class AiNetworkError(AiError):
    """Network connectivity issues."""

    def __init__(self, detail: str = "AI network error") -> None:
        super().__init__(detail, HTTP_503_SERVICE_UNAVAILABLE)


class AIGenerationError(AiError):
    """Raised when the completion service returns nothing usable."""

    def __init__(self, detail: str = "AI content generation failed") -> None:
        super().__init__(detail, HTTP_502_BAD_GATEWAY)


class ItineraryParseError(AiError):
    """Raised when a completion cannot be turned into an itinerary."""

    def __init__(self, detail: str = "Invalid itinerary format from AI") -> None:
        super().__init__(detail, HTTP_502_BAD_GATEWAY)


ai_exception_handler: Callable[[Request, Exception], Awaitable[ORJSONResponse]] = (
    create_exception_handler(logger)
)

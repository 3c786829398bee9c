from app.errors.ai import (
    AiAuthenticationError,
    AiError,
    AIGenerationError,
    AiNetworkError,
    AiQuotaExceededError,
    ItineraryParseError,
    ai_exception_handler,
)
from app.errors.base import BaseAppError, create_exception_handler
from app.errors.circuit_breaker import CircuitBreakerError, circuit_breaker_exception_handler
from app.errors.editor import EditorIndexError
from app.errors.share import (
    CommentNotFoundError,
    CommentsNotAllowedError,
    PermissionDeniedError,
    ShareError,
    ShareExpiredError,
    ShareNotFoundError,
    share_exception_handler,
)
from app.errors.store import (
    RecordNotFoundError,
    StoreConnectionError,
    StoreError,
    StoreRequestError,
    store_exception_handler,
)
from app.errors.validation import validation_exception_handler

__all__ = [
    "AIGenerationError",
    "AiAuthenticationError",
    "AiError",
    "AiNetworkError",
    "AiQuotaExceededError",
    "BaseAppError",
    "CircuitBreakerError",
    "CommentNotFoundError",
    "CommentsNotAllowedError",
    "EditorIndexError",
    "ItineraryParseError",
    "PermissionDeniedError",
    "RecordNotFoundError",
    "ShareError",
    "ShareExpiredError",
    "ShareNotFoundError",
    "StoreConnectionError",
    "StoreError",
    "StoreRequestError",
    "ai_exception_handler",
    "circuit_breaker_exception_handler",
    "create_exception_handler",
    "share_exception_handler",
    "store_exception_handler",
    "validation_exception_handler",
]

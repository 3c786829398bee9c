# tests/errors/test_base.py
"""Tests for the application error hierarchy and the shared exception handler."""

from logging import getLogger
from unittest.mock import MagicMock

import pytest
from orjson import loads

from app.errors import (
    AiError,
    BaseAppError,
    CircuitBreakerError,
    CommentsNotAllowedError,
    EditorIndexError,
    ItineraryParseError,
    RecordNotFoundError,
    ShareError,
    ShareExpiredError,
    StoreConnectionError,
    StoreError,
    circuit_breaker_exception_handler,
    create_exception_handler,
)


@pytest.fixture
def request_mock() -> MagicMock:
    request = MagicMock()
    request.client.host = "127.0.0.1"
    request.url.path = "/test"
    return request


@pytest.mark.parametrize(
    ("error", "family", "status_code"),
    [
        (RecordNotFoundError(), StoreError, 404),
        (StoreConnectionError(), StoreError, 503),
        (ShareExpiredError(), ShareError, 410),
        (CommentsNotAllowedError(), ShareError, 403),
        (ItineraryParseError(), AiError, 502),
    ],
)
def test_status_codes(error: BaseAppError, family: type[BaseAppError], status_code: int) -> None:
    assert isinstance(error, family)
    assert error.status_code == status_code
    assert str(error) == error.detail


def test_editor_index_error_is_index_error() -> None:
    error = EditorIndexError("day", 4, 3)
    assert isinstance(error, IndexError)
    assert str(error) == "day index 4 out of range for 3 item(s)"


@pytest.mark.asyncio
async def test_handler_renders_detail(request_mock: MagicMock) -> None:
    handler = create_exception_handler(getLogger(__name__))

    response = await handler(request_mock, RecordNotFoundError(detail="Itinerary 'x' not found"))

    assert response.status_code == 404
    assert loads(response.body) == {"detail": "Itinerary 'x' not found"}


@pytest.mark.asyncio
async def test_handler_includes_extra_attributes(request_mock: MagicMock) -> None:
    handler = create_exception_handler(getLogger(__name__))
    error = CircuitBreakerError(detail="down", retry_after=12.5, circuit_name="gemini_ai")

    response = await handler(request_mock, error)

    assert response.status_code == 503
    assert loads(response.body) == {
        "detail": "down",
        "retry_after": 12.5,
        "circuit_name": "gemini_ai",
    }
    assert str(error) == "down (retry in 12.5s)"


@pytest.mark.asyncio
async def test_circuit_breaker_handler_sets_retry_after(request_mock: MagicMock) -> None:
    error = CircuitBreakerError("document_store", retry_after=4.2)

    response = await circuit_breaker_exception_handler(request_mock, error)

    assert response.status_code == 503
    assert response.headers["Retry-After"] == "5"
    assert loads(response.body)["detail"] == "Service 'document_store' temporarily unavailable"


@pytest.mark.asyncio
async def test_circuit_breaker_handler_without_retry_hint(request_mock: MagicMock) -> None:
    response = await circuit_breaker_exception_handler(request_mock, CircuitBreakerError("x"))
    assert "Retry-After" not in response.headers

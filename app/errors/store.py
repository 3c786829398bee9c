from logging import getLogger

from starlette.status import (
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class StoreError(BaseAppError):
    """Base exception for document store errors."""

    def __init__(
        self,
        detail: str = "Document store error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail, status_code)


class StoreConnectionError(StoreError):
    """Exception raised when the document store cannot be reached."""

    def __init__(
        self,
        detail: str = "Failed to connect to the document store",
    ) -> None:
        super().__init__(detail, HTTP_503_SERVICE_UNAVAILABLE)


class StoreRequestError(StoreError):
    """Exception raised when the document store rejects a request."""

    def __init__(
        self,
        detail: str = "Document store request failed",
    ) -> None:
        super().__init__(detail, HTTP_502_BAD_GATEWAY)


class RecordNotFoundError(StoreError):
    """Exception raised when a record is not found."""

    def __init__(
        self,
        detail: str = "Record not found",
    ) -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


store_exception_handler = create_exception_handler(logger)

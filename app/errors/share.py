from logging import getLogger

from starlette.status import HTTP_403_FORBIDDEN, HTTP_404_NOT_FOUND, HTTP_410_GONE

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class ShareError(BaseAppError):
    """Base exception for sharing and comment errors."""

    def __init__(
        self,
        detail: str = "Share error",
        status_code: int = HTTP_403_FORBIDDEN,
    ) -> None:
        super().__init__(detail, status_code)


class ShareNotFoundError(ShareError):
    """Raised when a share identifier does not resolve."""

    def __init__(self, detail: str = "Shared itinerary not found") -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


class ShareExpiredError(ShareError):
    """Raised when a share link is past its expiry time."""

    def __init__(self, detail: str = "Shared itinerary has expired") -> None:
        super().__init__(detail, HTTP_410_GONE)


class CommentsNotAllowedError(ShareError):
    """Raised when commenting on a view-only share."""

    def __init__(self, detail: str = "Comments not allowed on this shared itinerary") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


class CommentNotFoundError(ShareError):
    """Raised when a comment does not exist on the share."""

    def __init__(self, detail: str = "Comment not found") -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


class PermissionDeniedError(ShareError):
    """Raised when a role lacks the capability for an action."""

    def __init__(self, detail: str = "Permission denied") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


share_exception_handler = create_exception_handler(logger)

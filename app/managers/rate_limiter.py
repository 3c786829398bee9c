# app/managers/rate_limiter.py

"""Request rate limiting with slowapi."""

from logging import getLogger
from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from app.configs import LimiterConfig, file_logger
from app.utils.helpers import host

logger = file_logger(getLogger(__name__))


def get_identifier(request: Request) -> str:
    """
    Key requests by caller.

    Identified callers (``X-User-Id``) get their own bucket; anonymous
    callers share a bucket per client address.
    """
    user_id = request.headers.get("X-User-Id")
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(**LimiterConfig().model_dump(), key_func=get_identifier)


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """Turn slowapi's RateLimitExceeded into a 429 JSON body."""
    http_exc = cast(RateLimitExceeded, exc)
    logger.warning(f"Rate limit exceeded for ip: {host(request)} on {request.url.path}")
    return ORJSONResponse(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        content={
            "detail": "Rate limit exceeded",
            "allowed_requests": http_exc.detail,
        },
    )

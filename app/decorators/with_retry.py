from collections.abc import Awaitable, Callable
from logging import getLogger

from httpx import TransportError
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.configs import file_logger

logger = file_logger(getLogger(__name__))

# Transport-level failures are worth another attempt; HTTP error statuses are not
RETRIABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    ConnectionError,
    TimeoutError,
    TransportError,
)


def _log_before_sleep(max_retries: int) -> Callable[[RetryCallState], None]:
    """Build a tenacity ``before_sleep`` hook that logs each retry."""

    def before_sleep_callback(retry_state: RetryCallState) -> None:
        exception = retry_state.outcome.exception() if retry_state.outcome else None
        sleep_duration = retry_state.next_action.sleep if retry_state.next_action else 0
        func_name = getattr(retry_state.fn, "__qualname__", "unknown")

        logger.warning(
            "Retry %d/%d for %s after %.2fs delay. Exception: %s",
            retry_state.attempt_number,
            max_retries,
            func_name,
            sleep_duration,
            exception,
        )

    return before_sleep_callback


def with_retry[**P, T](
    max_retries: int = 3,
    base_delay: float = 0.1,
    max_delay: float = 2.0,
    exec_retry: tuple[type[Exception], ...] = RETRIABLE_EXCEPTIONS,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Retry an async callable with exponential backoff.

    Args:
        max_retries: Total number of attempts, the first one included.
        base_delay: Initial delay between attempts in seconds.
        max_delay: Upper bound for the delay in seconds.
        exec_retry: Exception types that trigger another attempt.

    Returns:
        Decorator applying the retry policy. After the last attempt the
        original exception is re-raised unchanged.
    """
    return retry(
        stop=stop_after_attempt(max(1, max_retries)),
        wait=wait_exponential(multiplier=base_delay, min=base_delay, max=max_delay),
        retry=retry_if_exception_type(exec_retry),
        before_sleep=_log_before_sleep(max_retries),
        reraise=True,
    )

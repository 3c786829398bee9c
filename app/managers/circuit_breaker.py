# app/managers/circuit_breaker.py
"""
Circuit breaker for calls leaving the process.

Two breakers are shared application-wide: one in front of the Gemini API and
one in front of the document store. When a dependency keeps failing, its
breaker opens and further calls fail fast with ``CircuitBreakerError``
instead of piling up behind a dead connection.

States:
    - CLOSED: calls pass through, consecutive failures are counted
    - OPEN: calls are rejected until ``recovery_timeout`` has elapsed
    - HALF_OPEN: trial calls decide whether to close or reopen
"""

from asyncio import Lock
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from logging import getLogger
from time import monotonic
from typing import Any

from app.configs import file_logger
from app.errors import CircuitBreakerError, StoreConnectionError

logger = file_logger(getLogger(__name__))


class CircuitState(Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


@dataclass(frozen=True)
class CircuitBreakerConfig:
    """Thresholds for a CircuitBreaker."""

    name: str = "default"
    failure_threshold: int = 5
    recovery_timeout: float = 60.0
    expected_exceptions: type[Exception] | tuple[type[Exception], ...] = Exception
    success_threshold: int = 1


class CircuitBreaker:
    """
    Async circuit breaker guarding a single downstream dependency.

    Only exceptions matching ``expected_exceptions`` count as failures;
    anything else propagates without touching the breaker state.
    """

    def __init__(self, config: CircuitBreakerConfig) -> None:
        self.name = config.name
        self.failure_threshold = config.failure_threshold
        self.recovery_timeout = config.recovery_timeout
        self.expected_exceptions = config.expected_exceptions
        self.success_threshold = config.success_threshold

        self._failure_count = 0
        self._half_open_successes = 0
        self._opened_at: float | None = None
        self._state = CircuitState.CLOSED
        self._lock = Lock()

    @property
    def state(self) -> CircuitState:
        return self._state

    @property
    def failure_count(self) -> int:
        return self._failure_count

    async def call[T](
        self,
        func: Callable[..., Awaitable[T]],
        *args: Any,  # noqa: ANN401
        **kwargs: Any,  # noqa: ANN401
    ) -> T:
        """
        Run ``func`` under breaker protection.

        Raises:
            CircuitBreakerError: If the circuit is OPEN and still cooling down.
            Exception: Whatever ``func`` raises.
        """
        async with self._lock:
            self._before_call()

        try:
            result = await func(*args, **kwargs)
        except self.expected_exceptions:
            await self._record_failure()
            raise

        await self._record_success()
        return result

    def _before_call(self) -> None:
        if self._state != CircuitState.OPEN:
            return

        remaining = self._seconds_until_retry()
        if remaining <= 0:
            self._state = CircuitState.HALF_OPEN
            self._half_open_successes = 0
            logger.info(f"Circuit breaker '{self.name}' is HALF_OPEN, allowing a trial call")
            return

        logger.warning(f"Circuit breaker '{self.name}' is OPEN, retry in {remaining:.1f}s")
        raise CircuitBreakerError(self.name, retry_after=remaining)

    def _seconds_until_retry(self) -> float:
        if self._opened_at is None:
            return 0.0
        return max(0.0, self.recovery_timeout - (monotonic() - self._opened_at))

    async def _record_success(self) -> None:
        async with self._lock:
            if self._state == CircuitState.HALF_OPEN:
                self._half_open_successes += 1
                if self._half_open_successes < self.success_threshold:
                    return
                self._state = CircuitState.CLOSED
                self._opened_at = None
                logger.info(f"Circuit breaker '{self.name}' recovered, now CLOSED")
            self._failure_count = 0

    async def _record_failure(self) -> None:
        async with self._lock:
            self._failure_count += 1
            if self._state == CircuitState.HALF_OPEN:
                self._open()
                logger.warning(f"Circuit breaker '{self.name}' reopened by a failed trial call")
            elif self._failure_count >= self.failure_threshold:
                self._open()
                logger.error(
                    f"Circuit breaker '{self.name}' OPENED after "
                    f"{self._failure_count} consecutive failures",
                )

    def _open(self) -> None:
        self._state = CircuitState.OPEN
        self._opened_at = monotonic()
        self._half_open_successes = 0

    async def reset(self) -> None:
        """Force the breaker back to CLOSED."""
        async with self._lock:
            self.reset_sync()

    def reset_sync(self) -> None:
        """Reset without taking the lock; for tests and startup only."""
        self._failure_count = 0
        self._half_open_successes = 0
        self._opened_at = None
        self._state = CircuitState.CLOSED

    def get_state(self) -> dict[str, Any]:
        """Snapshot of the breaker for the health endpoint."""
        return {
            "name": self.name,
            "state": self._state.value,
            "failure_count": self._failure_count,
            "failure_threshold": self.failure_threshold,
            "time_until_reset": (
                self._seconds_until_retry() if self._state == CircuitState.OPEN else 0.0
            ),
        }


ai_circuit_breaker = CircuitBreaker(
    config=CircuitBreakerConfig(
        name="gemini_ai",
        failure_threshold=5,
        recovery_timeout=60.0,
        expected_exceptions=Exception,
    ),
)

store_circuit_breaker = CircuitBreaker(
    config=CircuitBreakerConfig(
        name="document_store",
        failure_threshold=3,
        recovery_timeout=30.0,
        expected_exceptions=StoreConnectionError,
    ),
)

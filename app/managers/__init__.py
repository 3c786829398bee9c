from app.managers.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitState,
    ai_circuit_breaker,
    store_circuit_breaker,
)
from app.managers.debounce import DebouncedSaver
from app.managers.rate_limiter import limiter, rate_limit_exceeded_handler

__all__ = [
    "CircuitBreaker",
    "CircuitBreakerConfig",
    "CircuitState",
    "DebouncedSaver",
    "ai_circuit_breaker",
    "limiter",
    "rate_limit_exceeded_handler",
    "store_circuit_breaker",
]

"""
Observability helpers.

>>> from app.monitoring import configure_logging
>>> configure_logging()
"""

from app.monitoring.logging import (
    bind_request_context,
    clear_context,
    configure_logging,
    get_logger,
    redact_pii,
    sanitize_headers,
    sanitize_log_message,
)

__all__ = [
    "bind_request_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "redact_pii",
    "sanitize_headers",
    "sanitize_log_message",
]

"""
Structured logging with PII sanitization.

Module loggers stay plain ``logging.getLogger(__name__)`` instances; this
module routes the root logger through structlog's ProcessorFormatter so
every record is rendered the same way:

- development: coloured console output with rich tracebacks
- anything else: one JSON object per line

Messages are stripped of control characters (log injection) and of
credentials and e-mail addresses before rendering.

Examples
--------
>>> from app.monitoring import configure_logging, get_logger
>>> configure_logging()
>>> get_logger(__name__).info("itinerary saved", itinerary_id="abc")
"""

from logging import StreamHandler, root
from re import Pattern
from re import compile as re_compile
from typing import Any

from structlog import configure
from structlog import get_logger as struct_logger
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars
from structlog.dev import ConsoleRenderer, RichTracebackFormatter
from structlog.processors import (
    JSONRenderer,
    StackInfoRenderer,
    UnicodeDecoder,
    add_log_level,
    format_exc_info,
)
from structlog.stdlib import (
    BoundLogger,
    ExtraAdder,
    LoggerFactory,
    PositionalArgumentsFormatter,
    ProcessorFormatter,
    add_logger_name,
    filter_by_level,
)
from structlog.types import EventDict, Processor, WrappedLogger

from app.configs.settings import settings
from app.utils.helpers import utc_now

SENSITIVE_HEADERS: frozenset[str] = frozenset(
    {
        "authorization",
        "cookie",
        "apikey",
        "x-api-key",
        "x-goog-api-key",
        "proxy-authorization",
    },
)

# Order matters: JWTs contain dots and would partially match later patterns
PII_PATTERNS: list[tuple[Pattern[str], str]] = [
    (re_compile(r"eyJ[a-zA-Z0-9_-]*\.eyJ[a-zA-Z0-9_-]*\.[a-zA-Z0-9_-]*"), "[REDACTED_JWT]"),
    (re_compile(r"AIza[0-9A-Za-z_-]{35}"), "[REDACTED_API_KEY]"),
    (re_compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"), "[REDACTED_EMAIL]"),
]

CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})


def sanitize_log_message(message: str) -> str:
    r"""
    Escape control characters.

    >>> sanitize_log_message("Hello\nWorld")
    'Hello\\nWorld'
    """
    return message.translate(CONTROL_CHARS)


def sanitize_headers(headers: dict[str, Any]) -> dict[str, Any]:
    """
    Return headers with sensitive values redacted.

    >>> sanitize_headers({"apikey": "secret", "Content-Type": "json"})
    {'apikey': '[REDACTED]', 'Content-Type': 'json'}
    """
    return {k: "[REDACTED]" if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()}


def redact_pii(message: str) -> str:
    """
    Replace credentials and e-mail addresses with placeholders.

    >>> redact_pii("Comment by user@example.com")
    'Comment by [REDACTED_EMAIL]'
    """
    for pattern, replacement in PII_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["timestamp"] = utc_now().isoformat(timespec="milliseconds")
    return event_dict


def sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Sanitize every string value of the event, and redact header dicts."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = redact_pii(sanitize_log_message(value))
        elif key.lower() == "headers" and isinstance(value, dict):
            event_dict[key] = sanitize_headers(value)
    return event_dict


def get_renderers(*, colors: bool = True) -> list[Processor]:
    """Final rendering processors for the current environment."""
    if settings.ENVIRONMENT == "development":
        return [
            ConsoleRenderer(
                colors=colors,
                pad_level=False,
                exception_formatter=RichTracebackFormatter(),
            ),
        ]
    return [format_exc_info, JSONRenderer()]


def configure_logging() -> None:
    """Route the root logger through structlog. Safe to call more than once."""
    # Hot reload calls this again; clear handlers to avoid duplicate lines
    root.handlers.clear()
    root.setLevel(settings.LOG_LEVEL.upper())

    configure(
        processors=[
            filter_by_level,
            merge_contextvars,
            add_logger_name,
            add_log_level,
            add_timestamp,
            PositionalArgumentsFormatter(),
            StackInfoRenderer(),
            format_exc_info,
            UnicodeDecoder(),
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = StreamHandler()
    handler.setFormatter(
        ProcessorFormatter(
            processors=[
                ProcessorFormatter.remove_processors_meta,
                sanitize_event_dict,
                *get_renderers(colors=True),
            ],
            foreign_pre_chain=[
                merge_contextvars,
                add_logger_name,
                add_log_level,
                add_timestamp,
                ExtraAdder(),
            ],
        ),
    )
    root.addHandler(handler)


def get_logger(name: str) -> BoundLogger:
    """Structlog logger bound to ``name``."""
    return struct_logger(name)


def bind_request_context(**values: Any) -> None:  # noqa: ANN401
    """Attach values (request id, user id) to every log line of the current request."""
    bind_contextvars(**values)


def clear_context() -> None:
    clear_contextvars()

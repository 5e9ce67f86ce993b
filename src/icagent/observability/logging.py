"""Structured logging for icagent.

Modules obtain loggers with :func:`get_logger`; nothing is configured on
import. Applications that want icagent's output format call
:func:`configure_logging` once at startup.

Environment Variables:
    ICAGENT_LOG_FORMAT: "json" for JSON lines, "console" for readable output
    ICAGENT_LOG_LEVEL: Minimum level (DEBUG, INFO, WARNING, ERROR)
    ICAGENT_SERVICE_NAME: Service name bound to every event

Example:
    >>> from icagent.observability.logging import configure_logging, get_logger
    >>>
    >>> configure_logging(log_format="json", log_level="INFO")
    >>> logger = get_logger("icagent.cbor.codec")
    >>> logger.info("cbor.decode.failed", reason="premature end of stream")
"""

import logging
import os
from typing import Any

import structlog
from structlog.typing import FilteringBoundLogger, Processor

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "console"
DEFAULT_SERVICE_NAME = "icagent"

ENV_LOG_FORMAT = "ICAGENT_LOG_FORMAT"
ENV_LOG_LEVEL = "ICAGENT_LOG_LEVEL"
ENV_SERVICE_NAME = "ICAGENT_SERVICE_NAME"

REDACTED_PLACEHOLDER = "***REDACTED***"

# Case-insensitive key substrings that mark key material.
_SENSITIVE_KEY_PATTERNS = frozenset({"secret", "private", "key", "seed"})

_logging_configured = False


def _is_sensitive_key(key: str) -> bool:
    lower = key.lower()
    return any(pattern in lower for pattern in _SENSITIVE_KEY_PATTERNS)


def sanitize_for_logging(data: dict[str, Any]) -> dict[str, Any]:
    """Copy ``data`` with key material replaced by REDACTED_PLACEHOLDER.

    Nested dicts and lists of dicts are handled recursively.

    Example:
        >>> sanitize_for_logging({"kind": "legacy", "_privateKey": {"data": [1, 2]}})
        {'kind': 'legacy', '_privateKey': '***REDACTED***'}
    """
    result: dict[str, Any] = {}
    for k, v in data.items():
        if _is_sensitive_key(str(k)):
            result[k] = REDACTED_PLACEHOLDER
        elif isinstance(v, dict):
            result[k] = sanitize_for_logging(v)
        elif isinstance(v, list):
            result[k] = [
                sanitize_for_logging(item) if isinstance(item, dict) else item for item in v
            ]
        else:
            result[k] = v
    return result


def configure_logging(
    log_format: str | None = None,
    log_level: str | None = None,
    service_name: str | None = None,
    force: bool = False,
) -> None:
    """Configure structlog output for the calling application.

    Only structlog's own configuration is changed; stdlib logging handlers
    and levels are left to the host.

    Args:
        log_format: "json" or "console". Defaults to env var or "console"
        log_level: Minimum log level. Defaults to env var or "INFO"
        service_name: Bound as ``service`` on every event. Defaults to env var or "icagent"
        force: If True, reconfigure even if already configured
    """
    global _logging_configured

    if _logging_configured and not force:
        return

    log_format = (log_format or os.environ.get(ENV_LOG_FORMAT, DEFAULT_LOG_FORMAT)).lower()
    log_level = (log_level or os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)).upper()
    service_name = service_name or os.environ.get(ENV_SERVICE_NAME, DEFAULT_SERVICE_NAME)

    renderer: Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, log_level)),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    structlog.contextvars.bind_contextvars(service=service_name)

    _logging_configured = True


def get_logger(name: str) -> FilteringBoundLogger:
    """Return a structlog logger bound to ``name``.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("identity.generated", source="random")
    """
    logger: FilteringBoundLogger = structlog.stdlib.get_logger().bind(logger=name)
    return logger

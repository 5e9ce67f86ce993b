"""Observability module for icagent.

Structured logging (structlog) shared by the codec and identity layers.

Example:
    >>> from icagent.observability import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.debug("cbor.encode", size=42)
"""

from icagent.observability.logging import (
    configure_logging,
    get_logger,
    sanitize_for_logging,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "sanitize_for_logging",
]

"""icagent Error Taxonomy.

This module defines the error hierarchy for the agent codec and identity
layers, providing structured error handling with specific error codes
and context information.
"""
from __future__ import annotations

from typing import Any

import cbor2


class AgentError(Exception):
    """Base exception for all icagent errors.

    This is the root exception class that all icagent-specific errors
    inherit from. It provides a standardized way to handle codec and
    identity failures with error codes and additional context.

    Attributes:
        code: Error code following the icagent:<area>/<kind> pattern
        message: Human-readable error message
        details: Optional additional error context
    """

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{code, message, details}`` dict."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class InvalidKeyLengthError(AgentError, ValueError):
    """Raised when a raw key or seed does not have the required length.

    Attributes:
        expected: Required length in bytes
        actual: Length that was supplied
    """

    def __init__(
        self,
        expected: int,
        actual: int,
        what: str = "ed25519 public key",
        details: dict[str, Any] | None = None,
    ) -> None:
        message = f"{what} must be {expected} bytes long (is {actual})"
        super().__init__(
            code="icagent:identity/invalid_key_length",
            message=message,
            details={"expected": expected, "actual": actual, **(details or {})},
        )
        self.expected = expected
        self.actual = actual


class InvalidCertificateLengthError(AgentError, ValueError):
    """Raised when a DER-encoded public key has the wrong total length."""

    def __init__(self, expected: int, actual: int, details: dict[str, Any] | None = None) -> None:
        message = f"Ed25519 DER-encoded public key must be {expected} bytes long (is {actual})"
        super().__init__(
            code="icagent:identity/invalid_der_length",
            message=message,
            details={"expected": expected, "actual": actual, **(details or {})},
        )
        self.expected = expected
        self.actual = actual


class CertificatePrefixMismatchError(AgentError, ValueError):
    """Raised when a DER-encoded public key does not carry the Ed25519 prefix.

    Attributes:
        prefix: Hex of the prefix that was expected
    """

    def __init__(self, prefix: str, details: dict[str, Any] | None = None) -> None:
        message = (
            "Ed25519 DER-encoded public key is invalid. A valid Ed25519 DER-encoded "
            f"public key must have the following prefix: {prefix}"
        )
        super().__init__(
            code="icagent:identity/der_prefix_mismatch",
            message=message,
            details={"prefix": prefix, **(details or {})},
        )
        self.prefix = prefix


class DeserializationError(AgentError, ValueError):
    """Raised when a serialized identity is not valid JSON or has an unknown shape."""

    def __init__(self, reason: str, details: dict[str, Any] | None = None) -> None:
        message = f"Deserialization error: {reason}"
        super().__init__(
            code="icagent:identity/deserialization",
            message=message,
            details=details or {},
        )
        self.reason = reason


class KeyDerivationError(AgentError):
    """Raised when the HMAC primitive behind seed derivation fails."""

    def __init__(self, reason: str, details: dict[str, Any] | None = None) -> None:
        message = f"Key derivation failed: {reason}"
        super().__init__(
            code="icagent:identity/key_derivation",
            message=message,
            details=details or {},
        )
        self.reason = reason


class DecodeError(AgentError, cbor2.CBORDecodeError):
    """Raised when CBOR wire input cannot be decoded.

    Also a ``cbor2.CBORDecodeError`` so callers that handle the decoder's own
    error type keep working. The decoder's exception is chained as ``__cause__``.
    """

    def __init__(self, reason: str, details: dict[str, Any] | None = None) -> None:
        message = f"CBOR decode failed: {reason}"
        super().__init__(
            code="icagent:cbor/decode",
            message=message,
            details=details or {},
        )
        self.reason = reason


class NoEncoderForTypeError(AgentError, TypeError):
    """Raised when no registered encoder matches a value.

    Attributes:
        type_name: Qualified name of the value's type
    """

    def __init__(self, type_name: str, details: dict[str, Any] | None = None) -> None:
        message = f"No CBOR encoder registered for type '{type_name}'"
        super().__init__(
            code="icagent:cbor/no_encoder",
            message=message,
            details={"type": type_name, **(details or {})},
        )
        self.type_name = type_name

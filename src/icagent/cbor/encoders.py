"""Built-in and protocol-specific CBOR encoders.

The base encoders cover CBOR's own data model. The three protocol encoders
(Principal, Buffer, BigNumber) are registered after them with lower priority
numbers, so they win wherever their predicates overlap a base encoder.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from cbor2 import CBORTag, FrozenDict

from icagent.cbor.registry import BASE_PRIORITY, CborEncoder, EncoderRegistry, ToCborValue
from icagent.types import BigInt, blob_from_buffer

# Standard bignum tags.
TAG_POSITIVE_BIGNUM = 2
TAG_NEGATIVE_BIGNUM = 3

_BYTES_TYPES = (bytes, bytearray, memoryview)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _encode_sequence(value: Any, to_cbor: ToCborValue) -> list[Any]:
    return [to_cbor(item) for item in value]


def _as_key(value: Any) -> Any:
    # Map keys must stay hashable; arrays and maps are frozen the way cbor2 decodes them.
    if isinstance(value, list):
        return tuple(_as_key(item) for item in value)
    if isinstance(value, dict):
        return FrozenDict({k: _as_key(v) for k, v in value.items()})
    return value


def _encode_mapping(value: Any, to_cbor: ToCborValue) -> dict[Any, Any]:
    return {_as_key(to_cbor(k)): to_cbor(v) for k, v in value.items()}


def _encode_tag(value: CBORTag, to_cbor: ToCborValue) -> CBORTag:
    return CBORTag(value.tag, to_cbor(value.value))


def base_encoders() -> list[CborEncoder]:
    """Encoders for CBOR's built-in types, in registration order."""
    return [
        CborEncoder("null", BASE_PRIORITY, lambda v: v is None, lambda v, _: None),
        CborEncoder("bool", BASE_PRIORITY, lambda v: isinstance(v, bool), lambda v, _: v),
        CborEncoder("number", BASE_PRIORITY, _is_int, lambda v, _: int(v)),
        CborEncoder("float", BASE_PRIORITY, lambda v: isinstance(v, float), lambda v, _: v),
        CborEncoder("string", BASE_PRIORITY, lambda v: isinstance(v, str), lambda v, _: str(v)),
        CborEncoder(
            "bytes",
            BASE_PRIORITY,
            lambda v: isinstance(v, _BYTES_TYPES),
            lambda v, _: blob_from_buffer(v),
        ),
        CborEncoder(
            "array", BASE_PRIORITY, lambda v: isinstance(v, (list, tuple)), _encode_sequence
        ),
        CborEncoder("object", BASE_PRIORITY, lambda v: isinstance(v, Mapping), _encode_mapping),
        CborEncoder("tagged", BASE_PRIORITY, lambda v: isinstance(v, CBORTag), _encode_tag),
    ]


def _match_principal(value: Any) -> bool:
    return getattr(value, "_is_principal", False) is True


def _encode_principal(value: Any, _: ToCborValue) -> bytes:
    return blob_from_buffer(value.to_bytes())


def _encode_bignum(value: BigInt, _: ToCborValue) -> CBORTag:
    # Negative values carry the plain magnitude, without the standard -1 offset.
    tag = TAG_POSITIVE_BIGNUM if value >= 0 else TAG_NEGATIVE_BIGNUM
    return CBORTag(tag, value.magnitude_bytes())


PRINCIPAL_ENCODER = CborEncoder(
    name="Principal",
    priority=0,
    match=_match_principal,
    encode=_encode_principal,
)

BUFFER_ENCODER = CborEncoder(
    name="Buffer",
    priority=1,
    match=lambda v: isinstance(v, _BYTES_TYPES),
    encode=lambda v, _: blob_from_buffer(v),
)

BIGINT_ENCODER = CborEncoder(
    name="BigNumber",
    priority=1,
    match=lambda v: isinstance(v, BigInt),
    encode=_encode_bignum,
)


def default_registry() -> EncoderRegistry:
    """Base encoders followed by the Principal, Buffer and BigNumber encoders."""
    registry = EncoderRegistry(base_encoders())
    for encoder in (PRINCIPAL_ENCODER, BUFFER_ENCODER, BIGINT_ENCODER):
        registry = registry.with_encoder(encoder)
    return registry

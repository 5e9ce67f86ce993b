"""CBOR codec for request and response values.

Public exports:
    encode, decode: module-level codec over the default registry
    CborCodec: codec bound to an explicit EncoderRegistry
    CborEncoder, EncoderRegistry: encoder registration entries and their set
    CborTag: protocol tag numbers
"""

from icagent.cbor.codec import CborCodec, CborTag, decode, encode
from icagent.cbor.encoders import (
    BIGINT_ENCODER,
    BUFFER_ENCODER,
    PRINCIPAL_ENCODER,
    base_encoders,
    default_registry,
)
from icagent.cbor.registry import BASE_PRIORITY, CborEncoder, EncoderRegistry

__all__ = [
    "BASE_PRIORITY",
    "BIGINT_ENCODER",
    "BUFFER_ENCODER",
    "PRINCIPAL_ENCODER",
    "CborCodec",
    "CborEncoder",
    "CborTag",
    "EncoderRegistry",
    "base_encoders",
    "decode",
    "default_registry",
    "encode",
]

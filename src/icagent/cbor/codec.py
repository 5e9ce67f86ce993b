"""Self-describing CBOR encode/decode for requests and responses.

Encoding walks the value through an :class:`EncoderRegistry` and wraps the
result in the self-describe tag (55799) before handing it to ``cbor2``.
Decoding reads exactly one item with ``cbor2`` (trailing bytes are left
unread) and turns a top-level ``canister_id`` into a :class:`Principal`.
"""

from __future__ import annotations

import io
from enum import IntEnum
from typing import Any

import cbor2
from cbor2 import CBORDecodeError, CBORDecoder, CBORTag

from icagent.cbor.encoders import default_registry
from icagent.cbor.registry import EncoderRegistry
from icagent.errors import DecodeError
from icagent.observability import get_logger
from icagent.principal import Principal
from icagent.types import BinaryBlob, BytesLike

logger = get_logger(__name__)

CANISTER_ID_FIELD = "canister_id"


class CborTag(IntEnum):
    """CBOR tags with protocol meaning."""

    # Reserved; decoded values carrying it are returned as cbor2.CBORTag.
    UINT64_LITTLE_ENDIAN = 71
    SEMANTIC = 55799


def _tag_hook(decoder: CBORDecoder, tag: CBORTag) -> Any:
    if tag.tag == CborTag.SEMANTIC:
        return tag.value
    return tag


def _rewrite_canister_id(result: Any) -> Any:
    if not isinstance(result, dict) or CANISTER_ID_FIELD not in result:
        return result
    value = result[CANISTER_ID_FIELD]
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DecodeError(
            f"{CANISTER_ID_FIELD} must be a non-negative integer",
            details={"type": type(value).__name__},
        )
    result[CANISTER_ID_FIELD] = Principal.from_text(format(value, "x"))
    return result


class CborCodec:
    """Encoder/decoder bound to one encoder registry.

    Args:
        registry: Encoder selection rules. Defaults to :func:`default_registry`.
        canonical: Ask cbor2 for canonical (sorted-key, shortest-form) output.
    """

    def __init__(self, registry: EncoderRegistry | None = None, canonical: bool = False) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.canonical = canonical

    def encode(self, value: Any) -> BinaryBlob:
        tree = self.registry.to_cbor_value(value)
        return cbor2.dumps(CBORTag(int(CborTag.SEMANTIC), tree), canonical=self.canonical)

    def decode(self, data: BytesLike) -> Any:
        """Decode the first CBOR item in ``data``.

        Raises:
            DecodeError: The input is truncated or malformed, or ``canister_id``
                is not an integer.
        """
        try:
            result = CBORDecoder(io.BytesIO(bytes(data)), tag_hook=_tag_hook).decode()
        except CBORDecodeError as e:
            logger.warning("cbor.decode.failed", reason=str(e), size=len(data))
            raise DecodeError(str(e), details={"size": len(data)}) from e
        return _rewrite_canister_id(result)


_default_codec = CborCodec()


def encode(value: Any) -> BinaryBlob:
    """Encode with the default registry."""
    return _default_codec.encode(value)


def decode(data: BytesLike) -> Any:
    """Decode with the default codec; see :meth:`CborCodec.decode`."""
    return _default_codec.decode(data)

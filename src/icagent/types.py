"""Value types shared by the codec and identity layers.

BinaryBlob is plain immutable ``bytes``; the helpers here convert the other
byte containers and hex text into it.
"""

from __future__ import annotations

from typing import TypeAlias, Union

BinaryBlob: TypeAlias = bytes
"""Immutable, length-known byte sequence (raw keys, signatures, DER keys, payloads)."""

BytesLike: TypeAlias = Union[bytes, bytearray, memoryview]


class BigInt(int):
    """Integer that is always encoded as a CBOR bignum (tag 2 or tag 3).

    Plain ``int`` values go through the base integer encoder; wrap a value in
    ``BigInt`` when the receiver expects bignum encoding regardless of size.

    Example:
        >>> BigInt(2**70) > 0
        True
    """

    def __repr__(self) -> str:
        return f"BigInt({int(self)})"

    def magnitude_bytes(self) -> bytes:
        """Minimal big-endian bytes of ``abs(self)`` (empty for zero)."""
        magnitude = abs(int(self))
        return magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "big")


def blob_from_buffer(buf: BytesLike) -> BinaryBlob:
    return bytes(buf)


def blob_from_hex(hex_str: str) -> BinaryBlob:
    """Parse hex text; an odd number of digits is left-padded with one zero."""
    if len(hex_str) % 2:
        hex_str = "0" + hex_str
    return bytes.fromhex(hex_str)


def blob_to_hex(blob: BytesLike) -> str:
    return bytes(blob).hex()

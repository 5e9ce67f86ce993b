"""Pydantic models for the serialized identity shapes.

Three shapes are accepted on read:

- ``["<der public key hex>", "<secret key hex>"]`` (the only shape written)
- ``{"publicKey": <bytes>, "secretKey": <bytes>}`` with a raw public key
- ``{"_publicKey": <bytes>, "_privateKey": <bytes>}`` with a DER public key

``<bytes>`` is a Node-style buffer object ``{"type": "Buffer", "data": [...]}``
or a bare list of byte values.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, StrictInt, StrictStr, TypeAdapter

ByteValue = Annotated[StrictInt, Field(ge=0, le=255)]


class BufferJson(BaseModel):
    """JSON form of a Node ``Buffer`` (``Buffer.prototype.toJSON``)."""

    type: Literal["Buffer"] | None = None
    data: list[ByteValue]


ByteArrayJson = Union[BufferJson, list[ByteValue]]


def byte_array_to_bytes(value: ByteArrayJson) -> bytes:
    if isinstance(value, BufferJson):
        return bytes(value.data)
    return bytes(value)


class RawKeyPairJson(BaseModel):
    """Object shape with a raw 32-byte public key."""

    public_key: ByteArrayJson = Field(..., alias="publicKey")
    secret_key: ByteArrayJson = Field(..., alias="secretKey")

    @property
    def public_bytes(self) -> bytes:
        return byte_array_to_bytes(self.public_key)

    @property
    def secret_bytes(self) -> bytes:
        return byte_array_to_bytes(self.secret_key)


class LegacyKeyPairJson(BaseModel):
    """Older object shape with a DER-encoded public key."""

    public_key: ByteArrayJson = Field(..., alias="_publicKey")
    private_key: ByteArrayJson = Field(..., alias="_privateKey")

    @property
    def public_bytes(self) -> bytes:
        return byte_array_to_bytes(self.public_key)

    @property
    def secret_bytes(self) -> bytes:
        return byte_array_to_bytes(self.private_key)


HexKeyPairJson: TypeAdapter[tuple[StrictStr, StrictStr]] = TypeAdapter(tuple[StrictStr, StrictStr])
"""Two-item array of hex strings: DER public key, then secret key."""

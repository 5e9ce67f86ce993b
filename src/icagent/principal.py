"""Principal identifiers for canisters and users.

A principal is an opaque byte string. Its textual form here is lowercase hex,
which is what the codec produces when it rewrites a decoded ``canister_id``.
"""

from __future__ import annotations

from cryptography.hazmat.primitives import hashes

from icagent.types import BinaryBlob, BytesLike, blob_from_buffer, blob_from_hex, blob_to_hex

# Suffix byte of principals derived from a public key.
SELF_AUTHENTICATING_SUFFIX = 0x02


class Principal:
    """Opaque protocol participant identifier.

    Instances carry ``_is_principal = True``; the CBOR principal encoder matches
    on that marker rather than on the class, so wrappers and proxies qualify.
    """

    _is_principal = True

    __slots__ = ("_blob",)

    def __init__(self, blob: BytesLike) -> None:
        self._blob: BinaryBlob = blob_from_buffer(blob)

    @classmethod
    def from_bytes(cls, blob: BytesLike) -> Principal:
        return cls(blob)

    @classmethod
    def from_hex(cls, hex_str: str) -> Principal:
        return cls(blob_from_hex(hex_str))

    @classmethod
    def from_text(cls, text: str) -> Principal:
        """Parse the textual (hex) form. Raises ValueError on non-hex input."""
        return cls.from_hex(text.strip().lower())

    @classmethod
    def self_authenticating(cls, der_public_key: BytesLike) -> Principal:
        """SHA-224 of the DER-encoded public key followed by the 0x02 suffix."""
        digest = hashes.Hash(hashes.SHA224())
        digest.update(bytes(der_public_key))
        return cls(digest.finalize() + bytes([SELF_AUTHENTICATING_SUFFIX]))

    def to_bytes(self) -> BinaryBlob:
        return self._blob

    def to_hex(self) -> str:
        return blob_to_hex(self._blob)

    def to_text(self) -> str:
        return self.to_hex()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Principal):
            return NotImplemented
        return self._blob == other._blob

    def __hash__(self) -> int:
        return hash(self._blob)

    def __repr__(self) -> str:
        return f"Principal({self.to_text()!r})"

    def __str__(self) -> str:
        return self.to_text()

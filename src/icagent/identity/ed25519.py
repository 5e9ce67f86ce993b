"""Ed25519 public keys and signing identities.

Public keys travel DER-encoded (SubjectPublicKeyInfo). For Ed25519 that is a
fixed 12-byte prefix followed by the 32-byte raw key, so encoding is a
concatenation and decoding is validated by re-encoding.

Secret keys are kept in the 64-byte NaCl layout (seed followed by the public
key) so serialized identities stay compatible with existing key files.
"""

from __future__ import annotations

import json
from typing import Any

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, hmac, serialization
from cryptography.hazmat.primitives.asymmetric import ed25519
from pydantic import ValidationError

from icagent.errors import (
    CertificatePrefixMismatchError,
    DeserializationError,
    InvalidCertificateLengthError,
    InvalidKeyLengthError,
    KeyDerivationError,
)
from icagent.identity.models import HexKeyPairJson, LegacyKeyPairJson, RawKeyPairJson
from icagent.identity.protocols import KeyPair, PublicKey
from icagent.observability import get_logger, sanitize_for_logging
from icagent.principal import Principal
from icagent.types import BinaryBlob, BytesLike, blob_to_hex

logger = get_logger(__name__)

RAW_KEY_LENGTH = 32
SEED_LENGTH = 32
SECRET_KEY_LENGTH = 64
SIGNATURE_LENGTH = 64

DER_PREFIX = bytes(
    [
        *[0x30, 0x2A],  # SEQUENCE
        *[0x30, 0x05],  # SEQUENCE
        *[0x06, 0x03],  # OBJECT IDENTIFIER
        *[0x2B, 0x65, 0x70],  # 1.3.101.112 (Ed25519)
        0x03,  # BIT STRING
        RAW_KEY_LENGTH + 1,
        0x00,  # no unused bits
    ]
)
DER_KEY_LENGTH = len(DER_PREFIX) + RAW_KEY_LENGTH

# HMAC key for the SLIP-0010 master key of the ed25519 curve.
SLIP0010_CURVE_KEY = b"ed25519 seed"


def _der_encode(raw_key: bytes) -> bytes:
    if len(raw_key) != RAW_KEY_LENGTH:
        raise InvalidKeyLengthError(RAW_KEY_LENGTH, len(raw_key))
    return DER_PREFIX + raw_key


def _der_decode(der_key: bytes) -> bytes:
    if len(der_key) != DER_KEY_LENGTH:
        raise InvalidCertificateLengthError(DER_KEY_LENGTH, len(der_key))
    raw_key = der_key[len(DER_PREFIX) :]
    if _der_encode(raw_key) != der_key:
        raise CertificatePrefixMismatchError(DER_PREFIX.hex())
    return raw_key


class Ed25519PublicKey:
    """Ed25519 public key convertible between raw (32 bytes) and DER (44 bytes) forms.

    Use :meth:`from_raw` or :meth:`from_der` to construct. The DER form is
    computed at construction, so a key of the wrong length is rejected before
    it can be emitted anywhere.
    """

    __slots__ = ("_raw_key", "_der_key")

    def __init__(self, raw_key: BytesLike) -> None:
        raw = bytes(raw_key)
        self._der_key = _der_encode(raw)
        self._raw_key = raw

    @classmethod
    def from_raw(cls, raw_key: BytesLike) -> Ed25519PublicKey:
        return cls(raw_key)

    @classmethod
    def from_der(cls, der_key: BytesLike) -> Ed25519PublicKey:
        """Raises InvalidCertificateLengthError or CertificatePrefixMismatchError."""
        return cls(_der_decode(bytes(der_key)))

    @classmethod
    def from_public_key(cls, key: PublicKey) -> Ed25519PublicKey:
        return cls.from_der(key.to_der())

    def to_raw(self) -> BinaryBlob:
        return self._raw_key

    def to_der(self) -> BinaryBlob:
        return self._der_key

    def verify(self, signature: BytesLike, message: BytesLike) -> bool:
        """Check a detached signature over ``message``."""
        key = ed25519.Ed25519PublicKey.from_public_bytes(self._raw_key)
        try:
            key.verify(bytes(signature), bytes(message))
        except InvalidSignature:
            return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ed25519PublicKey):
            return NotImplemented
        return self._raw_key == other._raw_key

    def __hash__(self) -> int:
        return hash(self._raw_key)

    def __repr__(self) -> str:
        return f"Ed25519PublicKey({self._raw_key.hex()!r})"


class Ed25519KeyIdentity:
    """Signing identity backed by an Ed25519 key pair.

    Construct with :meth:`generate`, :meth:`from_seed_with_slip0010`,
    :meth:`from_key_pair` or :meth:`from_json`.

    Example:
        >>> identity = Ed25519KeyIdentity.generate(bytes(32))
        >>> len(identity.get_public_key().to_der())
        44
    """

    def __init__(self, public_key: PublicKey, secret_key: BytesLike) -> None:
        self._public_key = Ed25519PublicKey.from_public_key(public_key)
        self._secret_key: BinaryBlob = bytes(secret_key)

    @classmethod
    def generate(cls, seed: BytesLike | None = None) -> Ed25519KeyIdentity:
        """New key pair; random without a seed, deterministic with a 32-byte seed."""
        if seed is None:
            private_key = ed25519.Ed25519PrivateKey.generate()
        else:
            seed = bytes(seed)
            if len(seed) != SEED_LENGTH:
                raise InvalidKeyLengthError(SEED_LENGTH, len(seed), what="ed25519 seed")
            private_key = ed25519.Ed25519PrivateKey.from_private_bytes(seed)

        seed_bytes = private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )
        public_raw = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        logger.debug("identity.generated", seeded=seed is not None)
        return cls(Ed25519PublicKey.from_raw(public_raw), seed_bytes + public_raw)

    @classmethod
    async def from_seed_with_slip0010(cls, seed: BytesLike) -> Ed25519KeyIdentity:
        """Derive the SLIP-0010 master key for ed25519 from ``seed``.

        HMAC-SHA-512 keyed with ``b"ed25519 seed"``; the left 32 bytes of the
        digest become the Ed25519 seed.

        Raises:
            KeyDerivationError: The HMAC primitive rejected its input.
        """
        try:
            mac = hmac.HMAC(SLIP0010_CURVE_KEY, hashes.SHA512())
            mac.update(bytes(seed))
            digest = mac.finalize()
        except (TypeError, ValueError, UnsupportedAlgorithm) as e:
            raise KeyDerivationError(str(e), details={"scheme": "slip0010"}) from e
        return cls.generate(digest[:SEED_LENGTH])

    @classmethod
    def from_key_pair(cls, public_key: BytesLike, secret_key: BytesLike) -> Ed25519KeyIdentity:
        """Raw public key plus secret key; the pair is not checked for consistency."""
        return cls(Ed25519PublicKey.from_raw(public_key), secret_key)

    @classmethod
    def from_json(cls, text: str | bytes) -> Ed25519KeyIdentity:
        """Restore an identity from any of the supported JSON shapes.

        Raises:
            DeserializationError: Not JSON, or not one of the known shapes.
        """
        try:
            parsed = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
            raise DeserializationError("identity is not valid JSON", details={"error": str(e)}) from e

        if isinstance(parsed, list):
            return cls._from_hex_pair(parsed)

        if isinstance(parsed, dict):
            try:
                raw = RawKeyPairJson.model_validate(parsed)
            except ValidationError:
                pass
            else:
                return cls(Ed25519PublicKey.from_raw(raw.public_bytes), raw.secret_bytes)
            try:
                legacy = LegacyKeyPairJson.model_validate(parsed)
            except ValidationError:
                pass
            else:
                return cls(Ed25519PublicKey.from_der(legacy.public_bytes), legacy.secret_bytes)
            logger.debug("identity.deserialize.rejected", shape=sanitize_for_logging(parsed))

        raise DeserializationError(
            f"Invalid JSON type for identity: {type(parsed).__name__}",
            details={"type": type(parsed).__name__},
        )

    @classmethod
    def _from_hex_pair(cls, parsed: list[Any]) -> Ed25519KeyIdentity:
        try:
            public_der_hex, secret_hex = HexKeyPairJson.validate_python(parsed)
        except ValidationError as e:
            raise DeserializationError(
                "JSON array must hold exactly 2 hex strings", details={"items": len(parsed)}
            ) from e
        try:
            public_der = bytes.fromhex(public_der_hex)
            secret_key = bytes.fromhex(secret_hex)
        except ValueError as e:
            raise DeserializationError("key material is not valid hex") from e
        return cls(Ed25519PublicKey.from_der(public_der), secret_key)

    def to_json_data(self) -> list[str]:
        return [blob_to_hex(self._public_key.to_der()), blob_to_hex(self._secret_key)]

    def to_json(self) -> str:
        """Serialize as ``["<der public key hex>","<secret key hex>"]``."""
        return json.dumps(self.to_json_data(), separators=(",", ":"))

    def get_key_pair(self) -> KeyPair:
        """Return the key pair with a fresh copy of the secret key."""
        # bytes(b) returns b itself; go through bytearray to get a new object
        return KeyPair(
            public_key=self._public_key,
            secret_key=bytes(bytearray(self._secret_key)),
        )

    def get_public_key(self) -> Ed25519PublicKey:
        return self._public_key

    def get_principal(self) -> Principal:
        return Principal.self_authenticating(self._public_key.to_der())

    async def sign(self, blob: BytesLike) -> BinaryBlob:
        """Detached Ed25519 signature over ``blob`` (64 bytes, deterministic)."""
        if len(self._secret_key) not in (SEED_LENGTH, SECRET_KEY_LENGTH):
            raise InvalidKeyLengthError(
                SECRET_KEY_LENGTH, len(self._secret_key), what="ed25519 secret key"
            )
        private_key = ed25519.Ed25519PrivateKey.from_private_bytes(self._secret_key[:SEED_LENGTH])
        return private_key.sign(bytes(blob))

    def __repr__(self) -> str:
        return f"Ed25519KeyIdentity(public_key={self._public_key.to_raw().hex()!r})"

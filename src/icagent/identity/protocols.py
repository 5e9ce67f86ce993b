"""Capability interfaces for public keys and signing identities.

Key schemes implement these structurally; there is no shared base class.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from icagent.principal import Principal
from icagent.types import BinaryBlob


@runtime_checkable
class PublicKey(Protocol):
    def to_der(self) -> BinaryBlob: ...


@runtime_checkable
class SignIdentity(Protocol):
    """Anything that can name its public key and sign a blob with the matching secret."""

    def get_public_key(self) -> PublicKey: ...

    def get_principal(self) -> Principal: ...

    async def sign(self, blob: BinaryBlob) -> BinaryBlob: ...


@dataclass(frozen=True)
class KeyPair:
    public_key: PublicKey
    secret_key: BinaryBlob

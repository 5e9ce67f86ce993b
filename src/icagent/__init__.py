"""icagent: request codec and signing identity for an Internet Computer agent.

- ``icagent.cbor``: self-describing CBOR with a pluggable encoder registry
- ``icagent.identity``: Ed25519 identities with DER public keys
- ``icagent.principal``: principal identifiers
"""

from icagent.cbor import CborCodec, decode, encode
from icagent.identity import Ed25519KeyIdentity, Ed25519PublicKey
from icagent.principal import Principal
from icagent.types import BigInt, BinaryBlob

__version__ = "0.1.0"

__all__ = [
    "BigInt",
    "BinaryBlob",
    "CborCodec",
    "Ed25519KeyIdentity",
    "Ed25519PublicKey",
    "Principal",
    "decode",
    "encode",
    "__version__",
]

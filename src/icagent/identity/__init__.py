"""Signing identities for authenticated requests.

Public exports:
    Ed25519PublicKey: raw/DER public key conversions and verification
    Ed25519KeyIdentity: key pair generation, SLIP-0010 derivation, JSON, signing
    PublicKey, SignIdentity, KeyPair: capability interfaces
"""

from icagent.identity.ed25519 import DER_PREFIX, Ed25519KeyIdentity, Ed25519PublicKey
from icagent.identity.protocols import KeyPair, PublicKey, SignIdentity

__all__ = [
    "DER_PREFIX",
    "Ed25519KeyIdentity",
    "Ed25519PublicKey",
    "KeyPair",
    "PublicKey",
    "SignIdentity",
]

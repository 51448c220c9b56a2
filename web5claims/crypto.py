"""
Hashing and signing primitives for Web5 Claims.

- SHA-256 hex digests (certificate hashes, verification-key hashes)
- Raw SHA-256 digests over several parts (simulated proof bytes)
- Ed25519 keys for signing certificates (RFC 8032)

Signatures are always computed over the JCS-canonical bytes of a JSON
object, so key order never affects the result.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
from dataclasses import dataclass

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from .canonicalize import canonicalize


# ---------------------------------------------------------------------------
# SHA-256
# ---------------------------------------------------------------------------

def _as_bytes(data: str | bytes) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


def sha256_hex(data: str | bytes) -> str:
    """Return the lowercase SHA-256 hex digest of *data*."""
    return hashlib.sha256(_as_bytes(data)).hexdigest()


def sha256_digest(*parts: str | bytes) -> bytes:
    """Hash the concatenation of *parts* and return the 32-byte digest."""
    hasher = hashlib.sha256()
    for part in parts:
        hasher.update(_as_bytes(part))
    return hasher.digest()


# ---------------------------------------------------------------------------
# Ed25519 keys
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class KeyPair:
    private_key: Ed25519PrivateKey
    public_key: Ed25519PublicKey
    kid: str  # first 16 hex chars of SHA-256(raw public key)


def generate_keypair() -> KeyPair:
    """Generate a fresh Ed25519 key pair for a certificate issuer."""
    sk = Ed25519PrivateKey.generate()
    pk = sk.public_key()
    kid = sha256_hex(public_key_bytes(pk))[:16]
    return KeyPair(private_key=sk, public_key=pk, kid=kid)


def public_key_bytes(pk: Ed25519PublicKey) -> bytes:
    return pk.public_bytes(Encoding.Raw, PublicFormat.Raw)


def public_key_b64(pk: Ed25519PublicKey) -> str:
    return base64.b64encode(public_key_bytes(pk)).decode()


def load_public_key_b64(b64: str) -> Ed25519PublicKey:
    return Ed25519PublicKey.from_public_bytes(base64.b64decode(b64))


# ---------------------------------------------------------------------------
# Signing & verification over canonical JSON
# ---------------------------------------------------------------------------

def sign_json(obj: dict, sk: Ed25519PrivateKey) -> str:
    """Sign the JCS form of *obj*; returns a base64 signature."""
    return base64.b64encode(sk.sign(canonicalize(obj))).decode()


def verify_json(obj: dict, signature_b64: str, pk: Ed25519PublicKey) -> bool:
    """Return True if *signature_b64* is a valid signature over JCS(obj).

    Malformed base64 is treated the same as a bad signature.
    """
    try:
        signature = base64.b64decode(signature_b64, validate=True)
        pk.verify(signature, canonicalize(obj))
    except (InvalidSignature, binascii.Error, ValueError):
        return False
    return True

"""
Shareable verification links.

A proof is packed into a URL-safe token:

    JSON  →  raw DEFLATE (level 9)  →  URL-safe base64, no padding

and embedded as ``{origin}/#/verify?proof=<token>`` so a verifier page can
rebuild the ZkProofClaim from the link alone.
"""

from __future__ import annotations

import base64
import binascii
import logging
import zlib
from typing import Optional
from urllib.parse import parse_qs, urlsplit

from pydantic import ValidationError

from .errors import ProofLinkError
from .schema import ZkProofClaim

logger = logging.getLogger(__name__)

_WBITS = -15  # raw deflate stream, no zlib header


def _compress(data: bytes) -> bytes:
    compressor = zlib.compressobj(9, zlib.DEFLATED, _WBITS)
    return compressor.compress(data) + compressor.flush()


def _decompress(data: bytes) -> bytes:
    return zlib.decompress(data, _WBITS)


def encode_proof_token(claim: ZkProofClaim) -> str:
    """Serialize, compress and base64url-encode a proof."""
    compressed = _compress(claim.model_dump_json().encode("utf-8"))
    return base64.urlsafe_b64encode(compressed).decode().rstrip("=")


def decode_proof_token(token: str) -> ZkProofClaim:
    """Inverse of :func:`encode_proof_token`. Raises ProofLinkError."""
    padded = token + "=" * (-len(token) % 4)
    try:
        compressed = base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as e:
        raise ProofLinkError(f"Failed to decode base64: {e}") from e
    try:
        raw = _decompress(compressed)
    except zlib.error as e:
        raise ProofLinkError(f"Decompression failed: {e}") from e
    try:
        claim = ZkProofClaim.model_validate_json(raw)
    except ValidationError as e:
        raise ProofLinkError(f"Failed to parse proof JSON: {e}") from e

    logger.info(f"Decoded proof {claim.proof_id} from link token ({len(token)} chars)")
    return claim


def generate_verify_link(claim: ZkProofClaim, origin: str) -> str:
    """Build ``{origin}/#/verify?proof=<token>``."""
    return f"{origin.rstrip('/')}/#/verify?proof={encode_proof_token(claim)}"


def decode_proof_from_link(url: str) -> Optional[ZkProofClaim]:
    """
    Extract the proof from a verify link.

    The ``proof`` parameter is looked up in the fragment's query first
    (``#/verify?proof=…``), then in the regular query string. Returns None
    when neither carries one.
    """
    parts = urlsplit(url)
    candidates = []
    if "?" in parts.fragment:
        candidates.append(parts.fragment.split("?", 1)[1])
    candidates.append(parts.query)

    for query in candidates:
        values = parse_qs(query).get("proof")
        if values:
            return decode_proof_token(values[0])

    logger.warning("No 'proof' parameter found in link")
    return None

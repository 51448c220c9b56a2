"""
Canonical circuits and the verification-key hash shared by issuer and verifier.

A "circuit" here is only a name for the issuer branch that produced a
proof. Issuer and verifier must derive identical ``vk_hash`` values for
each circuit id, so both call :func:`compute_verification_key_hash` and
nothing else computes it.
"""

from __future__ import annotations

from .config import PROOF_SYSTEM_VERSION, VK_HASH_PLATFORM
from .crypto import sha256_hex

LANGUAGE_PROFICIENCY_CIRCUIT = "language_proficiency_v1"
PERFORMANCE_THRESHOLD_CIRCUIT = "performance_threshold_v1"
COMPLETION_DATE_CIRCUIT = "completion_date_v1"
COMBINED_CRITERIA_CIRCUIT = "combined_criteria_v1"

# claim kind -> circuit id
CIRCUIT_FOR_CLAIM = {
    "language_proficiency": LANGUAGE_PROFICIENCY_CIRCUIT,
    "performance_threshold": PERFORMANCE_THRESHOLD_CIRCUIT,
    "completion_date": COMPLETION_DATE_CIRCUIT,
    "combined": COMBINED_CRITERIA_CIRCUIT,
}

CIRCUIT_DESCRIPTIONS = {
    LANGUAGE_PROFICIENCY_CIRCUIT: "Verifies language proficiency level claims",
    PERFORMANCE_THRESHOLD_CIRCUIT: "Verifies performance threshold claims",
    COMPLETION_DATE_CIRCUIT: "Verifies completion date claims",
    COMBINED_CRITERIA_CIRCUIT: "Verifies combined criteria claims",
}


def compute_verification_key_hash(circuit_id: str) -> str:
    """SHA-256 hex of ``"vk_" + circuit_id + "test"``.

    The platform suffix is fixed; proofs for "aleo" or "stylus" carry the
    same vk hash as proofs for "test".
    """
    return sha256_hex(f"vk_{circuit_id}{VK_HASH_PLATFORM}")


def default_circuits() -> list[dict]:
    """Registry entries for the four built-in circuits."""
    return [
        {
            "circuit_id": circuit_id,
            "version": PROOF_SYSTEM_VERSION,
            "vk_hash": compute_verification_key_hash(circuit_id),
            "description": description,
        }
        for circuit_id, description in CIRCUIT_DESCRIPTIONS.items()
    ]

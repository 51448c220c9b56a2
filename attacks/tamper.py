"""
Web5 Claims tamper harness — mutations of a serialized proof envelope.

Each attack takes the JSON dict of a ZkProofClaim (``model_dump(mode="json")``)
and returns a deep-copied, modified dict:

  T1: vk-hash swap          → CircuitVerificationFailed (hash mismatch)
  T2: circuit rename        → CircuitVerificationFailed (unknown circuit)
  T3: platform swap         → UnsupportedPlatform
  T4: proof-bytes strip     → IntegrityCheckFailed
  T5: proof-bytes truncate  → verifies, but is_valid=False
  T6: certificate-hash wipe → IntegrityCheckFailed
  T7: result flip           → NOT detected (verification_result is self-reported)
"""

from __future__ import annotations

import copy
import uuid

from web5claims.errors import VerifierError
from web5claims.schema import ZkProofClaim
from web5claims.verifier import ZkProofVerifier


def t1_vk_hash_swap(claim_dict: dict, vk_hash: str | None = None) -> dict:
    """T1: replace the verification-key hash with an arbitrary value."""
    tampered = copy.deepcopy(claim_dict)
    tampered["proof_data"]["vk_hash"] = vk_hash or uuid.uuid4().hex
    return tampered


def t2_circuit_rename(claim_dict: dict, circuit_id: str = "forged_circuit_v1") -> dict:
    """T2: point the proof at a circuit the verifier has never registered."""
    tampered = copy.deepcopy(claim_dict)
    tampered["proof_data"]["circuit_id"] = circuit_id
    return tampered


def t3_platform_swap(claim_dict: dict, platform: str = "unsupported_platform") -> dict:
    """T3: retarget the proof at another platform."""
    tampered = copy.deepcopy(claim_dict)
    tampered["metadata"]["platform"] = platform
    return tampered


def t4_strip_proof_bytes(claim_dict: dict) -> dict:
    """T4: remove the proof payload entirely."""
    tampered = copy.deepcopy(claim_dict)
    tampered["proof_data"]["proof_bytes"] = []
    return tampered


def t5_truncate_proof_bytes(claim_dict: dict, keep: int = 16) -> dict:
    """T5: keep only the first ``keep`` bytes of the proof payload."""
    tampered = copy.deepcopy(claim_dict)
    tampered["proof_data"]["proof_bytes"] = tampered["proof_data"]["proof_bytes"][:keep]
    return tampered


def t6_wipe_certificate_hash(claim_dict: dict) -> dict:
    """T6: drop the commitment to the certificate."""
    tampered = copy.deepcopy(claim_dict)
    tampered["public_inputs"]["certificate_hash"] = ""
    return tampered


def t7_flip_result(claim_dict: dict) -> dict:
    """
    T7: flip the self-reported verification result.

    The simulated verifier echoes ``verification_result`` without
    re-deriving it, so this one goes through unnoticed.
    """
    tampered = copy.deepcopy(claim_dict)
    inputs = tampered["public_inputs"]
    inputs["verification_result"] = not inputs["verification_result"]
    return tampered


ATTACKS = {
    "T1_vk_hash_swap": t1_vk_hash_swap,
    "T2_circuit_rename": t2_circuit_rename,
    "T3_platform_swap": t3_platform_swap,
    "T4_strip_proof_bytes": t4_strip_proof_bytes,
    "T5_truncate_proof_bytes": t5_truncate_proof_bytes,
    "T6_wipe_certificate_hash": t6_wipe_certificate_hash,
    "T7_flip_result": t7_flip_result,
}


def run_all_attacks(claim: ZkProofClaim, verifier: ZkProofVerifier) -> dict[str, dict]:
    """
    Apply every attack to ``claim`` and record how the verifier reacts.

    Returns ``{attack_name: {"detected": bool, "outcome": str}}`` where
    detected means the verifier raised or reported ``is_valid=False``.
    """
    original = claim.model_dump(mode="json")
    results: dict[str, dict] = {}

    for name, attack in ATTACKS.items():
        tampered = ZkProofClaim.model_validate(attack(original))
        try:
            result = verifier.verify_proof(tampered)
        except VerifierError as e:
            results[name] = {"detected": True, "outcome": type(e).__name__}
            continue
        results[name] = {
            "detected": not result.is_valid,
            "outcome": f"is_valid={result.is_valid}, requirements_met={result.requirements_met}",
        }

    return results

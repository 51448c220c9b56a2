"""
Proof verifier — checks a ZkProofClaim against a registry of trusted circuits.

Checks, in order (each raises on failure):
  1. Integrity: proof_id, certificate_hash, proof_bytes, circuit_id non-empty.
  2. Platform: metadata.platform is supported.
  3. Circuit trust: circuit_id is registered and its vk_hash matches.

A proof that passes all three always yields a VerificationResult. Unmet
requirements show up as ``requirements_met=False`` plus a warning, never
as an exception. ``requirements_met`` is the issuer's self-reported
verdict; the verifier does not re-derive it.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional

from .circuits import default_circuits
from .claims import CLAIM_LABELS
from .config import SUPPORTED_PLATFORMS
from .errors import (
    CircuitVerificationFailed,
    IntegrityCheckFailed,
    UnsupportedPlatform,
    VerifierError,
)
from .schema import (
    CircuitInfo,
    VerificationDetails,
    VerificationResult,
    VerificationStats,
    ZkProofClaim,
)

logger = logging.getLogger(__name__)

# Minimum length of a plausible (simulated) proof: one SHA-256 digest.
MIN_PROOF_BYTES = 32

_UNMET_WARNINGS = {
    "language_proficiency": "Language proficiency requirements not met",
    "performance_threshold": "Performance threshold not met",
    "completion_date": "Completion date requirements not met",
    "combined": "Combined criteria requirements not met",
}


class ZkProofVerifier:
    """Verifies simulated ZK proofs issued by a CertificateIssuer."""

    def __init__(
        self,
        verifier_id: str,
        supported_platforms: Iterable[str] | None = None,
        trusted_circuits: Iterable[CircuitInfo] | None = None,
    ):
        self.verifier_id = verifier_id
        self.supported_platforms = tuple(
            supported_platforms if supported_platforms is not None else SUPPORTED_PLATFORMS
        )
        self._lock = threading.RLock()
        if trusted_circuits is None:
            trusted_circuits = [CircuitInfo(**entry) for entry in default_circuits()]
        self._trusted_circuits: dict[str, CircuitInfo] = {
            info.circuit_id: info for info in trusted_circuits
        }

    # ── Verification ────────────────────────────────────────────────────────

    def verify_proof(self, claim: ZkProofClaim) -> VerificationResult:
        """
        Verify ``claim`` and report whether its requirements were met.

        Raises:
            IntegrityCheckFailed: a required envelope field is empty.
            UnsupportedPlatform: the proof targets an unknown platform.
            CircuitVerificationFailed: unknown circuit or vk hash mismatch.
        """
        try:
            if not claim.verify_integrity():
                raise IntegrityCheckFailed()
            if claim.metadata.platform not in self.supported_platforms:
                raise UnsupportedPlatform(claim.metadata.platform)
            self._verify_circuit(claim.proof_data.circuit_id, claim.proof_data.vk_hash)
        except VerifierError as e:
            logger.warning(f"Proof {claim.proof_id or '<no id>'} rejected: {e}")
            raise

        result = self._evaluate(claim)
        logger.info(
            f"Verified proof {claim.proof_id} "
            f"(circuit={claim.proof_data.circuit_id}, valid={result.is_valid}, "
            f"requirements_met={result.requirements_met})"
        )
        return result

    def _verify_circuit(self, circuit_id: str, provided_vk_hash: str) -> None:
        info = self.get_circuit_info(circuit_id)
        if info is None:
            raise CircuitVerificationFailed(f"Unknown circuit: {circuit_id}")
        if info.vk_hash != provided_vk_hash:
            raise CircuitVerificationFailed(
                f"Verification key hash mismatch for circuit '{circuit_id}': "
                f"expected '{info.vk_hash}', got '{provided_vk_hash}'"
            )

    def _evaluate(self, claim: ZkProofClaim) -> VerificationResult:
        # Same two checks for every claim kind; only the warning differs.
        kind = claim.claim_type.kind
        is_valid = self._simulate_verification(claim.proof_data.proof_bytes)
        requirements_met = claim.public_inputs.verification_result

        details = VerificationDetails(
            platform=claim.metadata.platform,
            circuit_id=claim.proof_data.circuit_id,
            verified_inputs=dict(claim.public_inputs.requirements),
            metadata=dict(claim.metadata.properties),
        )

        warnings = []
        if not requirements_met:
            warnings.append(
                _UNMET_WARNINGS.get(kind, f"{CLAIM_LABELS.get(kind, kind)} requirements not met")
            )

        return VerificationResult(
            is_valid=is_valid,
            requirements_met=requirements_met,
            details=details,
            warnings=warnings,
        )

    @staticmethod
    def _simulate_verification(proof_bytes: bytes) -> bool:
        # Stand-in for real proof checking: non-empty and digest-sized.
        return len(proof_bytes) >= MIN_PROOF_BYTES

    # ── Trust registry ──────────────────────────────────────────────────────

    def add_trusted_circuit(self, info: CircuitInfo) -> None:
        """Register (or replace) a trusted circuit."""
        with self._lock:
            self._trusted_circuits[info.circuit_id] = info
        logger.info(f"Verifier {self.verifier_id} now trusts circuit {info.circuit_id}")

    def is_circuit_trusted(self, circuit_id: str) -> bool:
        with self._lock:
            return circuit_id in self._trusted_circuits

    def get_circuit_info(self, circuit_id: str) -> Optional[CircuitInfo]:
        with self._lock:
            return self._trusted_circuits.get(circuit_id)

    def list_trusted_circuits(self) -> list[str]:
        with self._lock:
            return list(self._trusted_circuits)

    def get_verification_stats(self) -> VerificationStats:
        with self._lock:
            circuit_count = len(self._trusted_circuits)
        return VerificationStats(
            supported_platforms=len(self.supported_platforms),
            trusted_circuits=circuit_count,
            verifier_id=self.verifier_id,
        )

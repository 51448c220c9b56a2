"""
Certificate issuer — turns a certificate plus a requested claim into a
ZkProofClaim.

Steps for every request:
  1. Validate the certificate (fields + signature).
  2. Validate the target platform.
  3. Evaluate the claim against the certificate (per claim kind).
  4. Simulate proof bytes and attach the circuit's vk hash.
  5. Attach metadata (issuer identity + caller properties).

Only a failed performance threshold is a hard error. Other unmet claims
produce a proof whose ``verification_result`` is False.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Iterable

from .cefr import CefrLevel
from .certificate import CertificateData
from .circuits import (
    COMBINED_CRITERIA_CIRCUIT,
    COMPLETION_DATE_CIRCUIT,
    LANGUAGE_PROFICIENCY_CIRCUIT,
    PERFORMANCE_THRESHOLD_CIRCUIT,
    compute_verification_key_hash,
)
from .claims import (
    ClaimType,
    Combined,
    CompletionDate,
    LanguageProficiency,
    PerformanceThreshold,
)
from .config import PROOF_SYSTEM_VERSION, SUPPORTED_PLATFORMS
from .crypto import sha256_digest, sha256_hex
from .errors import (
    InsufficientPerformance,
    InvalidCefrLevel,
    InvalidCertificate,
    InvalidClaimType,
    IssuerError,
)
from .schema import ProofData, ProofMetadata, PublicInputs, ZkProofClaim

logger = logging.getLogger(__name__)


# ── Request types ───────────────────────────────────────────────────────────

@dataclass
class ProofOptions:
    """Optional extras recorded in the proof metadata."""
    include_performance_range: bool = False   # coarse 10-point bucket
    include_completion_date: bool = False     # calendar date only
    custom_properties: dict[str, str] = field(default_factory=dict)


@dataclass
class ProofRequest:
    certificate: CertificateData
    claim_type: ClaimType
    target_platform: str
    options: ProofOptions = field(default_factory=ProofOptions)


def performance_range(percentage: int) -> str:
    """Bucket a percentage as "0-9", "10-19", …, "90-100"."""
    low = min(percentage // 10 * 10, 90)
    high = 100 if low == 90 else low + 9
    return f"{low}-{high}"


# ── Issuer ──────────────────────────────────────────────────────────────────

class CertificateIssuer:
    """Generates simulated ZK proofs from language-learning certificates."""

    def __init__(
        self,
        issuer_id: str,
        issuer_name: str,
        supported_platforms: Iterable[str] | None = None,
    ):
        self.issuer_id = issuer_id
        self.issuer_name = issuer_name
        self.supported_platforms = tuple(
            supported_platforms if supported_platforms is not None else SUPPORTED_PLATFORMS
        )

    def generate_proof(self, request: ProofRequest) -> ZkProofClaim:
        """
        Build a proof for ``request.claim_type`` over ``request.certificate``.

        Raises:
            InvalidCertificate: missing fields, bad signature, or language mismatch.
            InvalidClaimType: unsupported target platform.
            InvalidCefrLevel: no CEFR level in the course identifier.
            InsufficientPerformance: performance below a requested threshold.
        """
        try:
            proof = self._generate(request)
        except IssuerError as e:
            logger.warning(f"Proof request rejected by {self.issuer_id}: {e}")
            raise

        logger.info(
            f"Issued proof {proof.proof_id} "
            f"(circuit={proof.proof_data.circuit_id}, platform={request.target_platform}, "
            f"result={proof.public_inputs.verification_result})"
        )
        return proof

    def _generate(self, request: ProofRequest) -> ZkProofClaim:
        self._validate_certificate(request.certificate)
        self._validate_request(request)

        claim = request.claim_type
        if isinstance(claim, LanguageProficiency):
            return self._language_proficiency_proof(request, claim)
        if isinstance(claim, PerformanceThreshold):
            return self._performance_proof(request, claim)
        if isinstance(claim, CompletionDate):
            return self._completion_date_proof(request, claim)
        if isinstance(claim, Combined):
            return self._combined_proof(request, claim)
        raise TypeError(f"Unknown claim type {type(claim).__name__}")

    # ── Validation ──────────────────────────────────────────────────────────

    def _validate_certificate(self, certificate: CertificateData) -> None:
        if not certificate.profile_name:
            raise InvalidCertificate("Profile name cannot be empty")
        if not certificate.game_path_name:
            raise InvalidCertificate("Game path name cannot be empty")
        if certificate.total_challenges <= 0:
            raise InvalidCertificate("Total challenges must be greater than 0")
        if not certificate.verify():
            raise InvalidCertificate("Certificate signature verification failed")

    def _validate_request(self, request: ProofRequest) -> None:
        if request.target_platform not in self.supported_platforms:
            raise InvalidClaimType(request.target_platform)

    # ── Per-claim builders ──────────────────────────────────────────────────

    def _language_proficiency_proof(
        self, request: ProofRequest, claim: LanguageProficiency
    ) -> ZkProofClaim:
        certificate = request.certificate
        cert_language = self._extract_language(certificate)
        if cert_language.casefold() != claim.language.casefold():
            raise InvalidCertificate(
                f"Certificate language {cert_language} does not match "
                f"requested language {claim.language}"
            )

        cert_level = CefrLevel.from_course_identifier(certificate.game_path_name)
        if cert_level is None:
            raise InvalidCefrLevel(certificate.game_path_name)

        requirements = {
            "min_level": str(claim.min_level),
            "language": claim.language,
        }
        return self._assemble(
            request, LANGUAGE_PROFICIENCY_CIRCUIT, requirements, cert_level >= claim.min_level
        )

    def _performance_proof(
        self, request: ProofRequest, claim: PerformanceThreshold
    ) -> ZkProofClaim:
        actual = request.certificate.performance_percentage
        if actual < claim.min_percentage:
            raise InsufficientPerformance(required=claim.min_percentage, actual=actual)

        requirements = {"min_percentage": claim.min_percentage}
        return self._assemble(request, PERFORMANCE_THRESHOLD_CIRCUIT, requirements, True)

    def _completion_date_proof(
        self, request: ProofRequest, claim: CompletionDate
    ) -> ZkProofClaim:
        meets = request.certificate.date >= claim.after_date
        requirements = {"after_date": claim.after_date.isoformat()}
        return self._assemble(request, COMPLETION_DATE_CIRCUIT, requirements, meets)

    def _combined_proof(self, request: ProofRequest, claim: Combined) -> ZkProofClaim:
        """
        Run each criterion as its own request and AND the results.

        A criterion that raises counts as failed; the remaining criteria
        are still evaluated, so their requirements still appear.
        """
        requirements: dict[str, Any] = {}
        all_pass = True

        for i, criterion in enumerate(claim.criteria):
            sub_request = ProofRequest(
                certificate=request.certificate,
                claim_type=criterion,
                target_platform=request.target_platform,
                options=request.options,
            )
            try:
                sub_proof = self._generate(sub_request)
            except IssuerError as e:
                logger.debug(f"Combined criterion {i} failed: {e}")
                all_pass = False
                continue

            all_pass = all_pass and sub_proof.public_inputs.verification_result
            for key, value in sub_proof.public_inputs.requirements.items():
                requirements[f"criterion_{i}_{key}"] = value

        return self._assemble(request, COMBINED_CRITERIA_CIRCUIT, requirements, all_pass)

    # ── Shared assembly ─────────────────────────────────────────────────────

    def _assemble(
        self,
        request: ProofRequest,
        circuit_id: str,
        requirements: dict[str, Any],
        verification_result: bool,
    ) -> ZkProofClaim:
        return ZkProofClaim.new(
            claim_type=request.claim_type,
            public_inputs=PublicInputs(
                requirements=requirements,
                verification_result=verification_result,
                certificate_hash=self.certificate_hash(request.certificate),
            ),
            proof_data=self._proof_data(circuit_id),
            metadata=self._metadata(request),
        )

    @staticmethod
    def _extract_language(certificate: CertificateData) -> str:
        return certificate.game_path_name.split("_")[0]

    @staticmethod
    def certificate_hash(certificate: CertificateData) -> str:
        return sha256_hex(certificate.to_base64())

    def _proof_data(self, circuit_id: str) -> ProofData:
        return ProofData(
            proof_bytes=self._simulate_proof(circuit_id),
            circuit_id=circuit_id,
            vk_hash=compute_verification_key_hash(circuit_id),
        )

    def _simulate_proof(self, circuit_id: str) -> bytes:
        # Placeholder for a real prover: 32 bytes, no cryptographic meaning.
        return sha256_digest(circuit_id, self.issuer_id, str(int(time.time())))

    def _metadata(self, request: ProofRequest) -> ProofMetadata:
        options = request.options
        certificate = request.certificate
        properties = {
            "issuer_id": self.issuer_id,
            "issuer_name": self.issuer_name,
        }
        if options.include_performance_range:
            properties["performance_range"] = performance_range(
                certificate.performance_percentage
            )
        if options.include_completion_date:
            properties["completion_date"] = certificate.date.date().isoformat()
        properties.update(options.custom_properties)

        return ProofMetadata(
            version=PROOF_SYSTEM_VERSION,
            platform=request.target_platform,
            properties=properties,
        )

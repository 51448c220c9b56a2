"""Web5 Claims — verifiable claims about language-learning certificates."""

from .cefr import CefrLevel
from .claims import (
    ClaimType,
    Combined,
    CompletionDate,
    LanguageProficiency,
    PerformanceThreshold,
)
from .certificate import CertificateData, build_certificate, sample_certificate
from .circuits import compute_verification_key_hash
from .config import SUPPORTED_PLATFORMS, ClaimsConfig
from .errors import (
    CircuitVerificationFailed,
    InsufficientPerformance,
    IntegrityCheckFailed,
    InvalidCefrLevel,
    InvalidCertificate,
    InvalidClaimType,
    IssuerError,
    ProofLinkError,
    UnsupportedPlatform,
    VerifierError,
)
from .issuer import CertificateIssuer, ProofOptions, ProofRequest
from .schema import (
    CircuitInfo,
    ProofData,
    ProofMetadata,
    PublicInputs,
    VerificationDetails,
    VerificationResult,
    VerificationStats,
    ZkProofClaim,
)
from .verifier import ZkProofVerifier

__all__ = [
    "CefrLevel",
    "ClaimType",
    "Combined",
    "CompletionDate",
    "LanguageProficiency",
    "PerformanceThreshold",
    "CertificateData",
    "build_certificate",
    "sample_certificate",
    "compute_verification_key_hash",
    "SUPPORTED_PLATFORMS",
    "ClaimsConfig",
    "CircuitVerificationFailed",
    "InsufficientPerformance",
    "IntegrityCheckFailed",
    "InvalidCefrLevel",
    "InvalidCertificate",
    "InvalidClaimType",
    "IssuerError",
    "ProofLinkError",
    "UnsupportedPlatform",
    "VerifierError",
    "CertificateIssuer",
    "ProofOptions",
    "ProofRequest",
    "CircuitInfo",
    "ProofData",
    "ProofMetadata",
    "PublicInputs",
    "VerificationDetails",
    "VerificationResult",
    "VerificationStats",
    "ZkProofClaim",
    "ZkProofVerifier",
]

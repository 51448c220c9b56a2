"""Exception types raised by the issuer, the verifier and proof links."""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Issuer
# ---------------------------------------------------------------------------

class IssuerError(Exception):
    """Base class for proof-generation failures."""


class InvalidCertificate(IssuerError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid certificate data: {reason}")


class InsufficientPerformance(IssuerError):
    def __init__(self, required: int, actual: int):
        self.required = required
        self.actual = actual
        super().__init__(
            f"Insufficient performance: required {required}, got {actual}"
        )


class InvalidCefrLevel(IssuerError):
    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Invalid CEFR level: {raw}")


class ProofGenerationFailed(IssuerError):
    # Reserved: no current code path raises this.
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Proof generation failed: {reason}")


class InvalidClaimType(IssuerError):
    """Raised when the requested target platform is not supported."""

    def __init__(self, platform: str = ""):
        self.platform = platform
        super().__init__("Invalid claim type for certificate")


# ---------------------------------------------------------------------------
# Verifier
# ---------------------------------------------------------------------------

class VerifierError(Exception):
    """Base class for proof-verification failures."""


class InvalidProof(VerifierError):
    # Reserved.
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid proof structure: {reason}")


class VerificationFailed(VerifierError):
    # Reserved.
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Verification failed: {reason}")


class UnsupportedPlatform(VerifierError):
    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"Unsupported platform: {platform}")


class IntegrityCheckFailed(VerifierError):
    def __init__(self):
        super().__init__("Proof integrity check failed")


class CircuitVerificationFailed(VerifierError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Circuit verification failed: {reason}")


# ---------------------------------------------------------------------------
# Proof links
# ---------------------------------------------------------------------------

class ProofLinkError(ValueError):
    """A shareable proof token could not be decoded."""

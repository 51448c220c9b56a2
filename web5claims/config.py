"""
Shared configuration for issuers and verifiers.

Both sides read the platform set and proof-system version from here so the
issuer never emits a platform the verifier does not know about.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

SUPPORTED_PLATFORMS: tuple[str, ...] = ("aleo", "stylus", "test")

PROOF_SYSTEM_VERSION = "1.0.0"

# Verification-key hashes are derived for this platform only, whatever
# the proof's target platform is.
VK_HASH_PLATFORM = "test"


def _platforms_from_env(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return SUPPORTED_PLATFORMS
    platforms = tuple(p.strip() for p in raw.split(",") if p.strip())
    return platforms or SUPPORTED_PLATFORMS


@dataclass
class ClaimsConfig:
    """Identity and platform settings for one issuer/verifier deployment."""
    issuer_id: str = "web5_claims_issuer"
    issuer_name: str = "Web5 Claims Official"
    verifier_id: str = "web5_claims_verifier"
    supported_platforms: tuple[str, ...] = field(
        default_factory=lambda: SUPPORTED_PLATFORMS
    )

    @classmethod
    def from_env(cls) -> "ClaimsConfig":
        """Build a config from ``WEB5CLAIMS_*`` environment variables."""
        defaults = cls()
        return cls(
            issuer_id=os.environ.get("WEB5CLAIMS_ISSUER_ID", defaults.issuer_id),
            issuer_name=os.environ.get("WEB5CLAIMS_ISSUER_NAME", defaults.issuer_name),
            verifier_id=os.environ.get("WEB5CLAIMS_VERIFIER_ID", defaults.verifier_id),
            supported_platforms=_platforms_from_env(
                os.environ.get("WEB5CLAIMS_PLATFORMS")
            ),
        )

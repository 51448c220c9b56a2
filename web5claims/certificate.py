"""
Language-learning certificate — the input every proof is built from.

A certificate records who completed which course path and how well:

    CertificateData(
        game_path_name="German_B2_Complete",   # <language>_<level>_<...>
        total_challenges=50,
        solved_challenges=47,
        performance_percentage=94,
        profile_name="Language Learner",
        date=...,
    )

It may carry a detached Ed25519 signature from the platform that issued
it. ``verify()`` checks that signature and ``to_base64()`` gives the
canonical export that proofs commit to via ``certificate_hash``.
"""

from __future__ import annotations

import base64
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .canonicalize import canonicalize
from .crypto import KeyPair, load_public_key_b64, public_key_b64, sign_json, verify_json


def performance_from_counts(total: int, solved: int) -> int:
    """Whole-number percentage of solved challenges (0 when total is 0)."""
    if total <= 0:
        return 0
    return min(100, max(0, solved * 100 // total))


class CertificateData(BaseModel):
    profile_name: str
    game_path_name: str  # course identifier, e.g. "German_B2_Complete"
    total_challenges: int = Field(ge=0)
    solved_challenges: int = Field(ge=0)
    performance_percentage: Optional[int] = Field(default=None, ge=0, le=100)
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    issuer_public_key: Optional[str] = None  # base64 Ed25519
    signature: Optional[str] = None  # base64 Ed25519 over signing_payload()

    @model_validator(mode="after")
    def _derive_performance(self) -> "CertificateData":
        if self.performance_percentage is None:
            self.performance_percentage = performance_from_counts(
                self.total_challenges, self.solved_challenges
            )
        if self.date.tzinfo is None:
            self.date = self.date.replace(tzinfo=timezone.utc)
        return self

    def signing_payload(self) -> dict:
        """Everything except the signature itself."""
        return self.model_dump(mode="json", exclude={"signature"})

    def verify(self) -> bool:
        """
        Check the issuing platform's signature.

        Unsigned certificates are accepted. A signed certificate verifies
        only if ``issuer_public_key`` is present and the signature matches.
        """
        if self.signature is None:
            return True
        if not self.issuer_public_key:
            return False
        try:
            pk = load_public_key_b64(self.issuer_public_key)
        except ValueError:
            return False
        return verify_json(self.signing_payload(), self.signature, pk)

    def to_base64(self) -> str:
        """Standard base64 of the JCS-canonical JSON of the certificate."""
        return base64.b64encode(canonicalize(self)).decode()


def build_certificate(
    game_path_name: str,
    total_challenges: int,
    solved_challenges: int,
    profile_name: str,
    date: datetime | None = None,
    keypair: KeyPair | None = None,
) -> CertificateData:
    """
    Build a certificate and, when ``keypair`` is given, sign it.

    The performance percentage is derived from the challenge counts.
    """
    cert = CertificateData(
        profile_name=profile_name,
        game_path_name=game_path_name,
        total_challenges=total_challenges,
        solved_challenges=solved_challenges,
        date=date or datetime.now(timezone.utc),
        issuer_public_key=public_key_b64(keypair.public_key) if keypair else None,
    )
    if keypair is not None:
        signature = sign_json(cert.signing_payload(), keypair.private_key)
        cert = cert.model_copy(update={"signature": signature})
    return cert


def sample_certificate() -> CertificateData:
    """The demo certificate: German B2, 47 of 50 challenges (94%)."""
    return build_certificate("German_B2_Complete", 50, 47, "Test Student")

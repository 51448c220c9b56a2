"""Request/response models for the Web5 Claims API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from web5claims.certificate import CertificateData
from web5claims.claims import ClaimType
from web5claims.schema import ZkProofClaim


# ---------------------------------------------------------------------------
# POST /claims/proof
# ---------------------------------------------------------------------------

class ProofOptionsModel(BaseModel):
    include_performance_range: bool = False
    include_completion_date: bool = False
    custom_properties: dict[str, str] = Field(default_factory=dict)


class ProofRequestModel(BaseModel):
    certificate: CertificateData
    claim_type: ClaimType
    target_platform: str = Field(default="test", min_length=1)
    options: ProofOptionsModel = Field(default_factory=ProofOptionsModel)


class ErrorResponse(BaseModel):
    error: str     # exception class name, e.g. "InsufficientPerformance"
    message: str


# ---------------------------------------------------------------------------
# POST /claims/verify
# ---------------------------------------------------------------------------

class VerifyRequest(BaseModel):
    proof: Optional[ZkProofClaim] = None
    proof_token: Optional[str] = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def _exactly_one(self) -> "VerifyRequest":
        if (self.proof is None) == (self.proof_token is None):
            raise ValueError("Provide exactly one of 'proof' or 'proof_token'")
        return self


# ---------------------------------------------------------------------------
# POST /claims/link
# ---------------------------------------------------------------------------

class LinkRequest(BaseModel):
    proof: ZkProofClaim
    origin: str = Field(default="http://localhost:8080", min_length=1)


class LinkResponse(BaseModel):
    token: str
    url: str

"""
Web5 Claims proof envelope — Pydantic v2 models.

    ZkProofClaim → PublicInputs
                 → ProofData
                 → ProofMetadata

plus the verifier's outputs (VerificationResult, VerificationDetails),
the trust-registry entry (CircuitInfo) and VerificationStats.

Hashes are lowercase SHA-256 hex. Timestamps are timezone-aware UTC
datetimes, serialized as ISO-8601. ``proof_bytes`` travels as a JSON
array of integers.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_serializer,
    field_validator,
)

from .canonicalize import canonicalize
from .claims import ClaimType
from .config import PROOF_SYSTEM_VERSION
from .crypto import sha256_hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# proof_bytes on the wire: a JSON array of octets
_BYTE_LIST = TypeAdapter(list[Annotated[int, Field(strict=True, ge=0, le=255)]])


# ---------------------------------------------------------------------------
# Envelope parts
# ---------------------------------------------------------------------------

class PublicInputs(BaseModel):
    model_config = ConfigDict(frozen=True)

    requirements: dict[str, Any] = Field(default_factory=dict)
    verification_result: bool  # issuer's own verdict, not recomputed downstream
    certificate_hash: str


class ProofData(BaseModel):
    model_config = ConfigDict(frozen=True)

    proof_bytes: bytes  # simulated; a digest, not a real proof
    circuit_id: str
    vk_hash: str

    @field_validator("proof_bytes", mode="before")
    @classmethod
    def _bytes_from_ints(cls, value):
        if isinstance(value, (list, tuple)):
            try:
                return bytes(_BYTE_LIST.validate_python(value))
            except ValidationError:
                raise ValueError("proof_bytes must be a list of integers in 0..255") from None
        return value

    @field_serializer("proof_bytes")
    def _bytes_to_ints(self, value: bytes) -> list[int]:
        return list(value)


class ProofMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str = PROOF_SYSTEM_VERSION
    platform: str
    properties: dict[str, str] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Root envelope
# ---------------------------------------------------------------------------

class ZkProofClaim(BaseModel):
    """A claim about a certificate together with its (simulated) proof."""
    model_config = ConfigDict(frozen=True)

    proof_id: str
    claim_type: ClaimType
    public_inputs: PublicInputs
    proof_data: ProofData
    generated_at: datetime
    metadata: ProofMetadata

    @classmethod
    def new(cls, **fields) -> "ZkProofClaim":
        """Build a freshly issued envelope with a new uuid4 id and UTC timestamp."""
        fields.setdefault("proof_id", str(uuid.uuid4()))
        fields.setdefault("generated_at", _utcnow())
        return cls(**fields)

    def verify_integrity(self) -> bool:
        """True when the four identity fields are all non-empty."""
        return bool(
            self.proof_id
            and self.public_inputs.certificate_hash
            and self.proof_data.proof_bytes
            and self.proof_data.circuit_id
        )

    def get_proof_hash(self) -> str:
        """SHA-256 over the canonical JSON form of the whole envelope."""
        return sha256_hex(canonicalize(self))

    def to_json(self, indent: int | None = None) -> str:
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, data: str | bytes) -> "ZkProofClaim":
        return cls.model_validate_json(data)


# ---------------------------------------------------------------------------
# Verifier outputs
# ---------------------------------------------------------------------------

class VerificationDetails(BaseModel):
    platform: str
    circuit_id: str
    verified_at: datetime = Field(default_factory=_utcnow)
    verified_inputs: dict[str, Any] = Field(default_factory=dict)
    metadata: dict[str, str] = Field(default_factory=dict)


class VerificationResult(BaseModel):
    is_valid: bool
    requirements_met: bool
    details: VerificationDetails
    warnings: list[str] = Field(default_factory=list)


class CircuitInfo(BaseModel):
    """A trusted circuit and the vk hash proofs for it must carry."""
    circuit_id: str = Field(min_length=1)
    version: str = PROOF_SYSTEM_VERSION
    vk_hash: str
    description: str = ""


class VerificationStats(BaseModel):
    supported_platforms: int
    trusted_circuits: int
    verifier_id: str

"""
Claim types — what a proof attests about a certificate.

``ClaimType`` is a tagged union discriminated by ``kind``:

    {"kind": "language_proficiency", "language": "German", "min_level": "B2"}
    {"kind": "performance_threshold", "min_percentage": 90}
    {"kind": "completion_date", "after_date": "2025-01-01T00:00:00Z"}
    {"kind": "combined", "criteria": [ ...nested claim types... ]}

Combined claims may nest other combined claims. Nothing limits the depth,
but each level re-runs the issuer on the full certificate, so keep it to a
few levels in practice.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .cefr import CefrLevel


class _Claim(BaseModel):
    model_config = ConfigDict(frozen=True)


class LanguageProficiency(_Claim):
    """Language level is at least ``min_level``, without revealing scores."""
    kind: Literal["language_proficiency"] = "language_proficiency"
    language: str
    min_level: CefrLevel


class PerformanceThreshold(_Claim):
    """At least ``min_percentage`` of challenges were solved."""
    kind: Literal["performance_threshold"] = "performance_threshold"
    min_percentage: int = Field(ge=0, le=100)


class CompletionDate(_Claim):
    """The certificate was completed on or after ``after_date``."""
    kind: Literal["completion_date"] = "completion_date"
    after_date: datetime

    @field_validator("after_date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Combined(_Claim):
    """All criteria hold simultaneously; evaluated in order."""
    kind: Literal["combined"] = "combined"
    criteria: list[ClaimType] = Field(default_factory=list)


ClaimType = Annotated[
    Union[LanguageProficiency, PerformanceThreshold, CompletionDate, Combined],
    Field(discriminator="kind"),
]

Combined.model_rebuild()


# Human-readable labels, used in verifier warnings and CLI output.
CLAIM_LABELS = {
    "language_proficiency": "Language proficiency",
    "performance_threshold": "Performance threshold",
    "completion_date": "Completion date",
    "combined": "Combined criteria",
}


def describe_claim(claim: ClaimType) -> str:
    """One-line human description of a claim, e.g. ``German >= B1``."""
    if isinstance(claim, LanguageProficiency):
        return f"{claim.language} >= {claim.min_level}"
    if isinstance(claim, PerformanceThreshold):
        return f"performance >= {claim.min_percentage}%"
    if isinstance(claim, CompletionDate):
        return f"completed after {claim.after_date.isoformat()}"
    inner = " AND ".join(describe_claim(c) for c in claim.criteria)
    return f"({inner})" if inner else "(no criteria)"

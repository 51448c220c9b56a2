"""Tests for the proof envelope models."""

import json

import pytest
from pydantic import ValidationError

from web5claims.cefr import CefrLevel
from web5claims.claims import LanguageProficiency, PerformanceThreshold
from web5claims.schema import (
    CircuitInfo,
    ProofData,
    ProofMetadata,
    PublicInputs,
    VerificationDetails,
    VerificationResult,
    ZkProofClaim,
)


def make_claim(**overrides) -> ZkProofClaim:
    fields = dict(
        claim_type=PerformanceThreshold(min_percentage=90),
        public_inputs=PublicInputs(
            requirements={"min_percentage": 90},
            verification_result=True,
            certificate_hash="hash123",
        ),
        proof_data=ProofData(
            proof_bytes=bytes(range(32)),
            circuit_id="test_circuit",
            vk_hash="vk123",
        ),
        metadata=ProofMetadata(platform="test"),
    )
    fields.update(overrides)
    return ZkProofClaim.new(**fields)


class TestZkProofClaim:
    def test_defaults(self):
        claim = make_claim()
        assert claim.proof_id
        assert claim.generated_at.tzinfo is not None
        assert claim.metadata.version == "1.0.0"
        assert claim.metadata.properties == {}

    def test_proof_ids_unique(self):
        assert make_claim().proof_id != make_claim().proof_id

    def test_integrity(self):
        assert make_claim().verify_integrity() is True

    @pytest.mark.parametrize("overrides", [
        {"proof_id": ""},
        {"public_inputs": PublicInputs(verification_result=True, certificate_hash="")},
        {"proof_data": ProofData(proof_bytes=b"", circuit_id="c", vk_hash="v")},
        {"proof_data": ProofData(proof_bytes=b"\x01", circuit_id="", vk_hash="v")},
    ])
    def test_integrity_fails_on_empty_field(self, overrides):
        assert make_claim(**overrides).verify_integrity() is False

    def test_frozen(self):
        claim = make_claim()
        with pytest.raises(ValidationError):
            claim.proof_id = "other"

    def test_proof_hash(self):
        claim = make_claim()
        assert len(claim.get_proof_hash()) == 64
        assert claim.get_proof_hash() == claim.get_proof_hash()
        assert make_claim().get_proof_hash() != claim.get_proof_hash()

    def test_proof_bytes_as_int_array(self):
        data = json.loads(make_claim().to_json())
        assert data["proof_data"]["proof_bytes"] == list(range(32))

    def test_json_roundtrip(self):
        claim = make_claim(claim_type=LanguageProficiency(language="German", min_level=CefrLevel.B1))
        restored = ZkProofClaim.from_json(claim.to_json())
        assert restored.proof_id == claim.proof_id
        assert restored.claim_type == claim.claim_type
        assert restored.public_inputs == claim.public_inputs
        assert restored.proof_data.proof_bytes == claim.proof_data.proof_bytes
        assert restored.generated_at == claim.generated_at

    def test_dict_roundtrip(self):
        claim = make_claim()
        restored = ZkProofClaim.model_validate(claim.model_dump())
        assert restored == claim

    def test_missing_claim_type_fails(self):
        data = make_claim().model_dump(mode="json")
        del data["claim_type"]
        with pytest.raises(ValidationError):
            ZkProofClaim.model_validate(data)

    @pytest.mark.parametrize("field", ["proof_id", "generated_at"])
    def test_parsing_never_mints_identity_fields(self, field):
        data = make_claim().model_dump(mode="json")
        del data[field]
        with pytest.raises(ValidationError):
            ZkProofClaim.model_validate(data)

    def test_new_keeps_explicit_id(self):
        assert make_claim(proof_id="fixed-id").proof_id == "fixed-id"

    @pytest.mark.parametrize("proof_bytes", [["x"], [1.5], [256], [-1], [True], {"a": 1}])
    def test_malformed_proof_bytes_rejected(self, proof_bytes):
        data = make_claim().model_dump(mode="json")
        data["proof_data"]["proof_bytes"] = proof_bytes
        with pytest.raises(ValidationError):
            ZkProofClaim.model_validate(data)


class TestVerificationModels:
    def test_result_defaults(self):
        result = VerificationResult(
            is_valid=True,
            requirements_met=False,
            details=VerificationDetails(platform="aleo", circuit_id="c"),
        )
        assert result.warnings == []
        assert result.details.verified_at.tzinfo is not None

    def test_circuit_info_requires_id(self):
        with pytest.raises(ValidationError):
            CircuitInfo(circuit_id="", vk_hash="x")

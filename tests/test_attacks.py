"""Tests for the tamper harness: which proof mutations the verifier catches."""

import pytest

from attacks.tamper import (
    ATTACKS,
    run_all_attacks,
    t1_vk_hash_swap,
    t2_circuit_rename,
    t3_platform_swap,
    t4_strip_proof_bytes,
    t5_truncate_proof_bytes,
    t6_wipe_certificate_hash,
    t7_flip_result,
)
from web5claims.cefr import CefrLevel
from web5claims.certificate import sample_certificate
from web5claims.claims import LanguageProficiency
from web5claims.errors import (
    CircuitVerificationFailed,
    IntegrityCheckFailed,
    UnsupportedPlatform,
)
from web5claims.issuer import CertificateIssuer, ProofRequest
from web5claims.schema import ZkProofClaim
from web5claims.verifier import ZkProofVerifier


@pytest.fixture
def verifier():
    return ZkProofVerifier("attack_verifier")


@pytest.fixture
def proof():
    issuer = CertificateIssuer("attack_issuer", "Attack Issuer")
    return issuer.generate_proof(ProofRequest(
        certificate=sample_certificate(),
        claim_type=LanguageProficiency(language="German", min_level=CefrLevel.B1),
        target_platform="test",
    ))


@pytest.fixture
def proof_dict(proof):
    return proof.model_dump(mode="json")


def rebuild(data: dict) -> ZkProofClaim:
    return ZkProofClaim.model_validate(data)


class TestT1VkHashSwap:
    def test_rejected(self, proof_dict, verifier):
        with pytest.raises(CircuitVerificationFailed, match="mismatch"):
            verifier.verify_proof(rebuild(t1_vk_hash_swap(proof_dict)))

    def test_original_untouched(self, proof_dict):
        before = proof_dict["proof_data"]["vk_hash"]
        t1_vk_hash_swap(proof_dict, "0" * 64)
        assert proof_dict["proof_data"]["vk_hash"] == before


class TestT2CircuitRename:
    def test_rejected(self, proof_dict, verifier):
        with pytest.raises(CircuitVerificationFailed, match="Unknown circuit"):
            verifier.verify_proof(rebuild(t2_circuit_rename(proof_dict)))


class TestT3PlatformSwap:
    def test_rejected(self, proof_dict, verifier):
        with pytest.raises(UnsupportedPlatform):
            verifier.verify_proof(rebuild(t3_platform_swap(proof_dict)))

    def test_swap_to_other_supported_platform_passes(self, proof_dict, verifier):
        # The platform is not bound to the proof bytes.
        result = verifier.verify_proof(rebuild(t3_platform_swap(proof_dict, "aleo")))
        assert result.is_valid is True


class TestT4StripProofBytes:
    def test_rejected(self, proof_dict, verifier):
        with pytest.raises(IntegrityCheckFailed):
            verifier.verify_proof(rebuild(t4_strip_proof_bytes(proof_dict)))


class TestT5TruncateProofBytes:
    def test_marked_invalid(self, proof_dict, verifier):
        result = verifier.verify_proof(rebuild(t5_truncate_proof_bytes(proof_dict)))
        assert result.is_valid is False

    def test_keep_length(self, proof_dict):
        assert len(t5_truncate_proof_bytes(proof_dict, keep=8)["proof_data"]["proof_bytes"]) == 8


class TestT6WipeCertificateHash:
    def test_rejected(self, proof_dict, verifier):
        with pytest.raises(IntegrityCheckFailed):
            verifier.verify_proof(rebuild(t6_wipe_certificate_hash(proof_dict)))


class TestT7FlipResult:
    def test_goes_unnoticed(self, proof_dict, verifier):
        tampered = rebuild(t7_flip_result(proof_dict))
        assert tampered.public_inputs.verification_result is False
        result = verifier.verify_proof(tampered)
        assert result.is_valid is True
        assert result.requirements_met is False

    def test_changes_proof_hash(self, proof, proof_dict):
        assert rebuild(t7_flip_result(proof_dict)).get_proof_hash() != proof.get_proof_hash()


class TestRunAllAttacks:
    def test_summary(self, proof, verifier):
        results = run_all_attacks(proof, verifier)
        assert set(results) == set(ATTACKS)
        detected = {name for name, r in results.items() if r["detected"]}
        assert detected == set(ATTACKS) - {"T7_flip_result"}
        assert results["T1_vk_hash_swap"]["outcome"] == "CircuitVerificationFailed"
        assert results["T3_platform_swap"]["outcome"] == "UnsupportedPlatform"
        assert results["T4_strip_proof_bytes"]["outcome"] == "IntegrityCheckFailed"
        assert "is_valid=False" in results["T5_truncate_proof_bytes"]["outcome"]

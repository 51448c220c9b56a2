"""Tests for shareable verify links."""

import base64
import json
import logging
import zlib

import pytest

from web5claims.cefr import CefrLevel
from web5claims.certificate import sample_certificate
from web5claims.claims import Combined, LanguageProficiency, PerformanceThreshold
from web5claims.errors import ProofLinkError
from web5claims.issuer import CertificateIssuer, ProofRequest
from web5claims.proof_link import (
    decode_proof_from_link,
    decode_proof_token,
    encode_proof_token,
    generate_verify_link,
)
from web5claims.verifier import ZkProofVerifier

ORIGIN = "https://claims.example.org"


@pytest.fixture
def proof():
    issuer = CertificateIssuer("link_issuer", "Link Issuer")
    claim = Combined(criteria=[
        LanguageProficiency(language="German", min_level=CefrLevel.B1),
        PerformanceThreshold(min_percentage=90),
    ])
    return issuer.generate_proof(
        ProofRequest(certificate=sample_certificate(), claim_type=claim, target_platform="test")
    )


class TestToken:
    def test_token_is_url_safe(self, proof):
        token = encode_proof_token(proof)
        assert "=" not in token
        assert "+" not in token and "/" not in token

    def test_token_is_raw_deflate(self, proof):
        token = encode_proof_token(proof)
        compressed = base64.urlsafe_b64decode(token + "=" * (-len(token) % 4))
        raw = zlib.decompress(compressed, -15)
        assert proof.proof_id.encode() in raw

    def test_token_roundtrip(self, proof):
        restored = decode_proof_token(encode_proof_token(proof))
        assert restored.proof_id == proof.proof_id
        assert restored.claim_type == proof.claim_type
        assert restored.proof_data.proof_bytes == proof.proof_data.proof_bytes

    def test_token_smaller_than_json(self, proof):
        assert len(encode_proof_token(proof)) < len(proof.model_dump_json())

    def test_decoded_proof_verifies(self, proof):
        result = ZkProofVerifier("link_verifier").verify_proof(
            decode_proof_token(encode_proof_token(proof))
        )
        assert result.is_valid and result.requirements_met

    @pytest.mark.parametrize("token,message", [
        ("!!!not-base64!!!", "base64"),
        (base64.urlsafe_b64encode(b"plain bytes").decode().rstrip("="), "Decompression"),
    ])
    def test_garbage_tokens(self, token, message):
        with pytest.raises(ProofLinkError, match=message):
            decode_proof_token(token)

    def test_valid_deflate_of_bad_json(self):
        compressor = zlib.compressobj(9, zlib.DEFLATED, -15)
        data = compressor.compress(b'{"proof_id": 1}') + compressor.flush()
        token = base64.urlsafe_b64encode(data).decode().rstrip("=")
        with pytest.raises(ProofLinkError, match="parse"):
            decode_proof_token(token)

    @pytest.mark.parametrize("proof_bytes", [["x"], [1.5], [300]])
    def test_malformed_proof_bytes(self, proof, proof_bytes):
        data = proof.model_dump(mode="json")
        data["proof_data"]["proof_bytes"] = proof_bytes
        compressor = zlib.compressobj(9, zlib.DEFLATED, -15)
        packed = compressor.compress(json.dumps(data).encode()) + compressor.flush()
        token = base64.urlsafe_b64encode(packed).decode().rstrip("=")
        with pytest.raises(ProofLinkError, match="parse"):
            decode_proof_token(token)

    def test_link_error_is_value_error(self):
        with pytest.raises(ValueError):
            decode_proof_token("@@@@")


class TestLinks:
    def test_link_format(self, proof):
        link = generate_verify_link(proof, ORIGIN + "/")
        assert link.startswith(f"{ORIGIN}/#/verify?proof=")
        assert link.endswith(encode_proof_token(proof))

    def test_decode_from_fragment(self, proof):
        restored = decode_proof_from_link(generate_verify_link(proof, ORIGIN))
        assert restored.proof_id == proof.proof_id

    def test_decode_from_query(self, proof):
        link = f"{ORIGIN}/verify?proof={encode_proof_token(proof)}"
        assert decode_proof_from_link(link).proof_id == proof.proof_id

    def test_missing_parameter(self, caplog):
        with caplog.at_level(logging.WARNING, logger="web5claims.proof_link"):
            assert decode_proof_from_link(f"{ORIGIN}/#/verify?other=1") is None
        assert "No 'proof' parameter" in caplog.text

    def test_corrupt_link_raises(self):
        with pytest.raises(ProofLinkError):
            decode_proof_from_link(f"{ORIGIN}/#/verify?proof=AAAA")

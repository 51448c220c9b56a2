"""
Web5 Claims FastAPI server.

Endpoints:
  POST /claims/proof       — issue a proof for a certificate + claim
  POST /claims/verify      — verify a proof (JSON or link token)
  POST /claims/link        — build a shareable verification link
  GET  /claims/circuits    — list trusted circuits
  GET  /claims/stats       — verifier statistics
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from web5claims.config import ClaimsConfig
from web5claims.errors import IssuerError, ProofLinkError, VerifierError
from web5claims.issuer import CertificateIssuer, ProofOptions, ProofRequest
from web5claims.proof_link import decode_proof_token, encode_proof_token, generate_verify_link
from web5claims.schema import CircuitInfo, VerificationResult, VerificationStats, ZkProofClaim
from web5claims.verifier import ZkProofVerifier

from .models import (
    ErrorResponse,
    LinkRequest,
    LinkResponse,
    ProofRequestModel,
    VerifyRequest,
)

app = FastAPI(
    title="Web5 Claims",
    description="Zero-knowledge style claims about language-learning certificates",
    version="0.1.0",
)

# CORS for the browser UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Global state (one issuer and one verifier per process)
# ---------------------------------------------------------------------------
_issuer: CertificateIssuer | None = None
_verifier: ZkProofVerifier | None = None


def get_issuer() -> CertificateIssuer:
    global _issuer
    if _issuer is None:
        config = ClaimsConfig.from_env()
        _issuer = CertificateIssuer(
            config.issuer_id,
            config.issuer_name,
            supported_platforms=config.supported_platforms,
        )
    return _issuer


def get_verifier() -> ZkProofVerifier:
    global _verifier
    if _verifier is None:
        config = ClaimsConfig.from_env()
        _verifier = ZkProofVerifier(
            config.verifier_id,
            supported_platforms=config.supported_platforms,
        )
    return _verifier


def _error(status_code: int, exc: Exception) -> JSONResponse:
    body = ErrorResponse(error=type(exc).__name__, message=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(IssuerError)
async def issuer_error_handler(request, exc: IssuerError):
    return _error(422, exc)


@app.exception_handler(VerifierError)
async def verifier_error_handler(request, exc: VerifierError):
    return _error(400, exc)


@app.exception_handler(ProofLinkError)
async def proof_link_error_handler(request, exc: ProofLinkError):
    return _error(400, exc)


# ---------------------------------------------------------------------------
# POST /claims/proof
# ---------------------------------------------------------------------------

@app.post("/claims/proof", response_model=ZkProofClaim)
async def issue_proof(req: ProofRequestModel):
    """Generate a proof; issuer errors map to 422."""
    request = ProofRequest(
        certificate=req.certificate,
        claim_type=req.claim_type,
        target_platform=req.target_platform,
        options=ProofOptions(**req.options.model_dump()),
    )
    return get_issuer().generate_proof(request)


# ---------------------------------------------------------------------------
# POST /claims/verify
# ---------------------------------------------------------------------------

@app.post("/claims/verify", response_model=VerificationResult)
async def verify_proof(req: VerifyRequest):
    """Verify a proof given inline or as a link token; verifier errors map to 400."""
    proof = req.proof if req.proof is not None else decode_proof_token(req.proof_token)
    return get_verifier().verify_proof(proof)


# ---------------------------------------------------------------------------
# POST /claims/link
# ---------------------------------------------------------------------------

@app.post("/claims/link", response_model=LinkResponse)
async def share_link(req: LinkRequest):
    return LinkResponse(
        token=encode_proof_token(req.proof),
        url=generate_verify_link(req.proof, req.origin),
    )


# ---------------------------------------------------------------------------
# GET /claims/circuits, /claims/stats
# ---------------------------------------------------------------------------

@app.get("/claims/circuits", response_model=list[CircuitInfo])
async def list_circuits():
    verifier = get_verifier()
    return [verifier.get_circuit_info(cid) for cid in sorted(verifier.list_trusted_circuits())]


@app.get("/claims/stats", response_model=VerificationStats)
async def stats():
    return get_verifier().get_verification_stats()

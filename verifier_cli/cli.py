"""
Web5 Claims CLI — issue, verify and share language-learning proofs.

Usage:
    python -m verifier_cli.cli issue cert.json --language German --min-level B1
    python -m verifier_cli.cli verify proof.json
    python -m verifier_cli.cli inspect proof.json
    python -m verifier_cli.cli circuits
    python -m verifier_cli.cli link proof.json --origin https://claims.example
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from web5claims.cefr import CefrLevel
from web5claims.certificate import CertificateData
from web5claims.claims import (
    Combined,
    CompletionDate,
    LanguageProficiency,
    PerformanceThreshold,
    describe_claim,
)
from web5claims.config import ClaimsConfig
from web5claims.errors import IssuerError, VerifierError
from web5claims.issuer import CertificateIssuer, ProofOptions, ProofRequest
from web5claims.proof_link import generate_verify_link
from web5claims.schema import ZkProofClaim
from web5claims.verifier import ZkProofVerifier


console = Console()


def _load_certificate(path: str) -> CertificateData:
    try:
        return CertificateData.model_validate_json(Path(path).read_text())
    except ValidationError as e:
        raise click.ClickException(f"Invalid certificate file: {e}")


def _load_proof(path: str) -> ZkProofClaim:
    try:
        return ZkProofClaim.model_validate_json(Path(path).read_text())
    except ValidationError as e:
        raise click.ClickException(f"Invalid proof file: {e}")


def _build_claim(language, min_level, min_percentage, after_date):
    criteria = []
    if language or min_level:
        if not (language and min_level):
            raise click.UsageError("--language and --min-level must be given together")
        criteria.append(
            LanguageProficiency(language=language, min_level=CefrLevel(min_level.upper()))
        )
    if min_percentage is not None:
        criteria.append(PerformanceThreshold(min_percentage=min_percentage))
    if after_date is not None:
        criteria.append(CompletionDate(after_date=after_date))

    if not criteria:
        raise click.UsageError("Specify at least one claim option")
    if len(criteria) == 1:
        return criteria[0]
    return Combined(criteria=criteria)


@click.group()
def main():
    """Web5 Claims — language-learning proof issuer and verifier."""
    pass


@main.command()
@click.argument("cert_file", type=click.Path(exists=True))
@click.option("--language", help="Language the certificate must be for")
@click.option("--min-level", type=click.Choice([lv.value for lv in CefrLevel], case_sensitive=False))
@click.option("--min-percentage", type=click.IntRange(0, 100))
@click.option("--after-date", type=click.DateTime(), help="Completed on or after (ISO date)")
@click.option("--platform", "-p", default="test", show_default=True)
@click.option("--issuer-id", default=None, help="Override the configured issuer id")
@click.option("--output", "-o", type=click.Path(), help="Write the proof JSON here")
def issue(cert_file, language, min_level, min_percentage, after_date: datetime | None,
          platform, issuer_id, output):
    """Generate a proof for a certificate."""
    config = ClaimsConfig.from_env()
    issuer = CertificateIssuer(
        issuer_id or config.issuer_id,
        config.issuer_name,
        supported_platforms=config.supported_platforms,
    )
    claim = _build_claim(language, min_level, min_percentage, after_date)
    request = ProofRequest(
        certificate=_load_certificate(cert_file),
        claim_type=claim,
        target_platform=platform,
        options=ProofOptions(),
    )

    try:
        proof = issuer.generate_proof(request)
    except IssuerError as e:
        console.print(f"[red]✗ Proof generation failed: {e}[/red]")
        sys.exit(1)

    payload = proof.to_json(indent=2)
    if output:
        Path(output).write_text(payload)
        console.print(f"[green]✓ Proof {proof.proof_id} written to {output}[/green]")
    else:
        click.echo(payload)


@main.command()
@click.argument("proof_file", type=click.Path(exists=True))
@click.option("--strict/--no-strict", default=False,
              help="Also fail when the claimed requirements are not met")
def verify(proof_file: str, strict: bool):
    """Verify a proof file."""
    proof = _load_proof(proof_file)
    config = ClaimsConfig.from_env()
    verifier = ZkProofVerifier(config.verifier_id, supported_platforms=config.supported_platforms)

    console.print(Panel("Web5 Claims Proof Verification", style="bold blue"))

    # 1-3. Integrity, platform and circuit trust
    console.print("\n[bold]1. Envelope Checks[/bold]")
    try:
        result = verifier.verify_proof(proof)
    except VerifierError as e:
        console.print(f"  [red]✗ {e}[/red]")
        console.print("\n[bold red]✗ PROOF REJECTED[/bold red]")
        sys.exit(1)
    console.print("  [green]✓ Integrity, platform and circuit checks passed[/green]")

    # 4. Claim outcome
    console.print("\n[bold]2. Claim[/bold]")
    console.print(f"  {describe_claim(proof.claim_type)}")
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Requirement", width=28)
    table.add_column("Value", width=30)
    for key, value in sorted(result.details.verified_inputs.items()):
        table.add_row(key, str(value))
    console.print(table)

    for warning in result.warnings:
        console.print(f"  [yellow]! {warning}[/yellow]")

    if result.is_valid and result.requirements_met:
        console.print("\n[bold green]✓ PROOF VERIFIED SUCCESSFULLY[/bold green]")
        return
    if not result.is_valid:
        console.print("\n[bold red]✗ PROOF DATA INVALID[/bold red]")
        sys.exit(1)
    console.print("\n[bold yellow]PROOF VALID, REQUIREMENTS NOT MET[/bold yellow]")
    if strict:
        sys.exit(1)


@main.command()
@click.argument("proof_file", type=click.Path(exists=True))
def inspect(proof_file: str):
    """Inspect a proof without verifying it."""
    proof = _load_proof(proof_file)

    console.print(Panel("Web5 Claims Proof Inspection", style="bold cyan"))
    console.print(f"  Proof ID:   {proof.proof_id}")
    console.print(f"  Generated:  {proof.generated_at.isoformat()}")
    console.print(f"  Claim:      {describe_claim(proof.claim_type)}")
    console.print(f"  Platform:   {proof.metadata.platform}")
    console.print(f"  Version:    {proof.metadata.version}")
    console.print(f"  Circuit:    {proof.proof_data.circuit_id}")
    console.print(f"  VK hash:    {proof.proof_data.vk_hash[:16]}...")
    console.print(f"  Cert hash:  {proof.public_inputs.certificate_hash[:16]}...")
    console.print(f"  Result:     {proof.public_inputs.verification_result}")

    console.print(f"\n  Properties: {len(proof.metadata.properties)}")
    for key, value in sorted(proof.metadata.properties.items()):
        console.print(f"    - {key}: {value}")


@main.command()
def circuits():
    """List the circuits a default verifier trusts."""
    verifier = ZkProofVerifier(ClaimsConfig.from_env().verifier_id)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Circuit", width=26)
    table.add_column("Version", width=8)
    table.add_column("VK hash", width=20)
    table.add_column("Description")
    for circuit_id in sorted(verifier.list_trusted_circuits()):
        info = verifier.get_circuit_info(circuit_id)
        table.add_row(info.circuit_id, info.version, info.vk_hash[:16] + "...", info.description)
    console.print(table)


@main.command()
@click.argument("proof_file", type=click.Path(exists=True))
@click.option("--origin", default="http://localhost:8080", show_default=True)
def link(proof_file: str, origin: str):
    """Print a shareable verification link for a proof."""
    click.echo(generate_verify_link(_load_proof(proof_file), origin))


if __name__ == "__main__":
    main()

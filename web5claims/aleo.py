"""
Leo program inputs for the ``web5claims.aleo`` program.

Leo has no strings, so languages are mapped to field literals and every
number carries its integer-type suffix (``4u8``, ``50u16``, ``1700000000u32``).
"""

from __future__ import annotations

import time

from .cefr import CefrLevel
from .certificate import CertificateData

PROGRAM_ID = "web5claims.aleo"

_LANGUAGE_FIELDS = {
    "german": 1,
    "spanish": 2,
    "french": 3,
    "italian": 4,
    "english": 5,
    "portuguese": 6,
    "dutch": 7,
    "russian": 8,
    "chinese": 9,
    "japanese": 10,
}


def encode_language_to_field(language: str) -> str:
    """Map a language name to its field literal; unknown → ``0field``."""
    return f"{_LANGUAGE_FIELDS.get(language.lower(), 0)}field"


def cefr_level_to_u8(level: CefrLevel) -> int:
    return level.rank


def current_timestamp() -> int:
    # u32 in the program
    return int(time.time()) & 0xFFFFFFFF


def certificate_to_leo_inputs(cert: CertificateData, recipient_address: str) -> list[str]:
    """Arguments for the program's certificate-issuing transition."""
    language = cert.game_path_name.split("_")[0] or "unknown"
    level = CefrLevel.from_course_identifier(cert.game_path_name)
    return [
        recipient_address,
        encode_language_to_field(language),
        f"{cefr_level_to_u8(level) if level else 1}u8",
        f"{cert.performance_percentage}u8",
        f"{cert.total_challenges}u16",
        f"{cert.solved_challenges}u16",
        f"{current_timestamp()}u32",
    ]


def language_proof_inputs(language: str, min_level: CefrLevel) -> list[str]:
    return [
        encode_language_to_field(language),
        f"{cefr_level_to_u8(min_level)}u8",
        f"{current_timestamp()}u32",
    ]


def performance_proof_inputs(language: str, min_score: int) -> list[str]:
    return [
        encode_language_to_field(language),
        f"{min_score}u8",
        f"{current_timestamp()}u32",
    ]


def combined_proof_inputs(language: str, min_level: CefrLevel, min_score: int) -> list[str]:
    return [
        encode_language_to_field(language),
        f"{cefr_level_to_u8(min_level)}u8",
        f"{min_score}u8",
        f"{current_timestamp()}u32",
    ]

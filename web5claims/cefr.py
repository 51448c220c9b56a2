"""
CEFR (Common European Framework of Reference) proficiency levels.

Levels compare by rank (A1=1 … C2=6). Because ``CefrLevel`` is a ``str``
enum, the comparison operators are overridden so ordering never falls back
to string comparison of the codes.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class CefrLevel(str, Enum):
    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def to_rank(self) -> int:
        return self.rank

    @classmethod
    def from_rank(cls, rank: int) -> "CefrLevel":
        for level, value in _RANKS.items():
            if value == rank:
                return level
        raise ValueError(f"CEFR rank must be 1..6, got {rank}")

    @classmethod
    def from_course_identifier(cls, identifier: str) -> Optional["CefrLevel"]:
        """
        Infer the level from a course identifier such as "German_B2_Complete".

        Levels are tried from A1 upwards and the first code contained in the
        identifier wins, so "Mixed_C1_A2" resolves to A2.
        """
        for level in cls:
            if level.value in identifier:
                return level
        return None

    def __str__(self) -> str:
        return self.value

    @classmethod
    def _coerce(cls, other) -> Optional["CefrLevel"]:
        # Plain codes such as "b1" compare by rank, never as strings
        if isinstance(other, cls):
            return other
        if isinstance(other, str):
            return cls(other.upper())
        return None

    def __lt__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.rank >= other.rank


_RANKS = {
    CefrLevel.A1: 1,
    CefrLevel.A2: 2,
    CefrLevel.B1: 3,
    CefrLevel.B2: 4,
    CefrLevel.C1: 5,
    CefrLevel.C2: 6,
}

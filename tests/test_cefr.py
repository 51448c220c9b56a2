"""Tests for CEFR level parsing and rank ordering."""

import pytest
from hypothesis import given, strategies as st

from web5claims.cefr import CefrLevel


class TestFromCourseIdentifier:
    def test_german_b2(self):
        assert CefrLevel.from_course_identifier("German_B2_Complete") == CefrLevel.B2

    def test_spanish_a1(self):
        assert CefrLevel.from_course_identifier("Spanish_A1_Basic") == CefrLevel.A1

    def test_no_level(self):
        assert CefrLevel.from_course_identifier("Invalid_Course") is None

    def test_lowest_code_wins(self):
        # Scanned from A1 upwards, so A2 beats C1 regardless of position.
        assert CefrLevel.from_course_identifier("Mixed_C1_A2") == CefrLevel.A2

    def test_case_sensitive(self):
        assert CefrLevel.from_course_identifier("german_b2") is None


class TestRankAndString:
    def test_ranks(self):
        assert CefrLevel.A1.to_rank() == 1
        assert CefrLevel.B2.rank == 4
        assert CefrLevel.C2.rank == 6

    def test_from_rank(self):
        assert CefrLevel.from_rank(3) == CefrLevel.B1
        with pytest.raises(ValueError):
            CefrLevel.from_rank(7)

    def test_string_roundtrip(self):
        for level in CefrLevel:
            assert CefrLevel(str(level)) is level

    def test_ordering(self):
        assert CefrLevel.B2 > CefrLevel.B1
        assert CefrLevel.A1 < CefrLevel.A2
        assert CefrLevel.C2 >= CefrLevel.C2
        assert CefrLevel.C1 <= CefrLevel.C2
        assert sorted([CefrLevel.C1, CefrLevel.A1, CefrLevel.B2]) == [
            CefrLevel.A1, CefrLevel.B2, CefrLevel.C1,
        ]


class TestPropertyBased:
    @given(st.sampled_from(list(CefrLevel)), st.sampled_from(list(CefrLevel)))
    def test_order_follows_rank(self, a, b):
        assert (a < b) == (a.rank < b.rank)
        assert (a >= b) == (a.rank >= b.rank)

    @given(st.sampled_from(list(CefrLevel)), st.sampled_from(list(CefrLevel)))
    def test_plain_codes_compare_by_rank(self, a, b):
        assert (a >= b.value.lower()) == (a.rank >= b.rank)
        assert (b.value.lower() < a) == (b.rank < a.rank)


class TestMixedComparisons:
    def test_code_operands(self):
        assert CefrLevel.B1 >= "A2"
        assert CefrLevel.B1 > "a2"
        assert not CefrLevel.B1 < "a2"
        assert "c1" > CefrLevel.B2

    def test_unknown_code_raises(self):
        with pytest.raises(ValueError):
            CefrLevel.B1 >= "Z9"

    def test_non_string_operand(self):
        with pytest.raises(TypeError):
            CefrLevel.B1 < 3

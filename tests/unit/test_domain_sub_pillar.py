"""Unit tests for SubPillar and StudentCode value objects.

Tests cover:
- The 81 valid bases (main and sub digit 1-9)
- from_base validation
- First/last code bounds and six-digit formatting
- StudentCode range enforcement
"""

import pytest

from credential_issuer.domain.value_objects import StudentCode, SubPillar


@pytest.mark.unit
class TestSubPillarBases:
    """Test the fixed set of sub-pillars."""

    def test_all_returns_81_sub_pillars(self):
        pillars = SubPillar.all()

        assert len(pillars) == 81
        assert len({p.base for p in pillars}) == 81

    def test_all_is_ordered_from_110000_to_990000(self):
        bases = [p.base for p in SubPillar.all()]

        assert bases[0] == 110000
        assert bases[-1] == 990000
        assert bases == sorted(bases)

    def test_all_skips_zero_sub_digit(self):
        bases = {p.base for p in SubPillar.all()}

        assert 190000 in bases
        assert 200000 not in bases
        assert 210000 in bases

    @pytest.mark.parametrize("base", [110000, 560000, 990000])
    def test_from_base_round_trips(self, base):
        assert SubPillar.from_base(base).base == base

    @pytest.mark.parametrize(
        "base",
        [0, 100000, 105000, 110001, 200000, 1000000, -110000],
    )
    def test_from_base_rejects_invalid(self, base):
        with pytest.raises(ValueError, match="Invalid sub-pillar base"):
            SubPillar.from_base(base)

    def test_constructor_rejects_zero_digit(self):
        with pytest.raises(ValueError, match="Sub-pillar digit"):
            SubPillar(main_digit=1, sub_digit=0)

        with pytest.raises(ValueError, match="Main pillar digit"):
            SubPillar(main_digit=0, sub_digit=1)


@pytest.mark.unit
class TestSubPillarRange:
    """Test code bounds of one sub-pillar."""

    def test_first_and_last_code(self):
        pillar = SubPillar.from_base(560000)

        assert pillar.first_code == 560001
        assert pillar.last_code == 569999

    def test_contains_bounds(self):
        pillar = SubPillar.from_base(560000)

        assert pillar.contains(560000)
        assert pillar.contains(569999)
        assert not pillar.contains(570000)
        assert not pillar.contains(559999)

    def test_format_code_is_six_digits(self):
        assert SubPillar.from_base(110000).format_code(110001) == "110001"

    def test_format_code_rejects_outside_number(self):
        with pytest.raises(ValueError):
            SubPillar.from_base(110000).format_code(120000)

    def test_str_is_base(self):
        assert str(SubPillar(main_digit=5, sub_digit=6)) == "560000"


@pytest.mark.unit
class TestStudentCode:
    """Test StudentCode value object."""

    def test_value_is_formatted_number(self):
        code = StudentCode(number=560001, sub_pillar=SubPillar.from_base(560000))

        assert code.value == "560001"
        assert str(code) == "560001"

    def test_rejects_number_outside_sub_pillar(self):
        with pytest.raises(ValueError, match="outside sub-pillar"):
            StudentCode(number=570001, sub_pillar=SubPillar.from_base(560000))

    def test_is_immutable(self):
        code = StudentCode(number=110001, sub_pillar=SubPillar.from_base(110000))

        with pytest.raises(AttributeError):
            code.number = 110002  # type: ignore[misc]

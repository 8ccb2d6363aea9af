"""Bar table and grade classification."""
import pytest

from rcc_takeoff.structural.bars import (
    BAR_SIZES,
    BAR_WEIGHTS,
    InvalidSpecificationError,
    TakeoffError,
    is_standard_size,
    steel_grade,
    unit_weight,
)


class TestBarTable:

    def test_bar_sizes(self):
        assert BAR_SIZES == [8, 10, 12, 16, 20, 25, 32]

    def test_every_size_has_a_weight(self):
        assert sorted(BAR_WEIGHTS) == BAR_SIZES

    @pytest.mark.parametrize("diameter, weight", [
        (8, 0.395), (10, 0.617), (12, 0.888), (16, 1.578),
        (20, 2.466), (25, 3.853), (32, 6.313),
    ])
    def test_unit_weight(self, diameter, weight):
        assert unit_weight(diameter) == weight

    @pytest.mark.parametrize("diameter", [None, 0, 6, 14, 40, 12.5])
    def test_unknown_diameter_weighs_nothing(self, diameter):
        assert unit_weight(diameter) == 0.0

    def test_is_standard_size(self):
        assert is_standard_size(16)
        assert is_standard_size(16.0)
        assert not is_standard_size(14)
        assert not is_standard_size(None)


class TestSteelGrade:

    @pytest.mark.parametrize("diameter", [8, 10, 12])
    def test_below_16_is_grade_40(self, diameter):
        assert steel_grade(diameter) == 40

    @pytest.mark.parametrize("diameter", [16, 20, 25, 32])
    def test_16_and_above_is_grade_60(self, diameter):
        assert steel_grade(diameter) == 60

    def test_threshold_is_strict(self):
        assert steel_grade(15.9) == 40
        assert steel_grade(16) == 60


class TestErrors:

    def test_invalid_specification_message(self):
        err = InvalidSpecificationError("S1", "main_bar_spacing", 0)
        assert "S1" in str(err)
        assert "main_bar_spacing" in str(err)
        assert err.spec_id == "S1"

    def test_hierarchy(self):
        err = InvalidSpecificationError("S1", "main_bar_spacing", -5)
        assert isinstance(err, TakeoffError)
        assert isinstance(err, ValueError)

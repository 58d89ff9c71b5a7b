"""
Unit tests for unit helpers.
"""
import pytest

from kanaku.services.units import is_decimal_unit, is_valid_quantity, unit_label


class TestUnits:

    @pytest.mark.parametrize("unit", ["kg", "g", "l", "ml"])
    def test_weight_and_volume_units_take_decimals(self, unit):
        assert is_decimal_unit(unit)
        assert is_valid_quantity(unit, 0.25)

    @pytest.mark.parametrize("unit", ["pcs", "box", "pack", "dozen"])
    def test_count_units_need_whole_numbers(self, unit):
        assert not is_decimal_unit(unit)
        assert is_valid_quantity(unit, 3)
        assert is_valid_quantity(unit, 3.0)
        assert not is_valid_quantity(unit, 1.5)

    @pytest.mark.parametrize("unit", ["kg", "pcs"])
    def test_non_finite_quantities_are_invalid(self, unit):
        assert not is_valid_quantity(unit, float("inf"))
        assert not is_valid_quantity(unit, float("nan"))

    def test_labels(self):
        assert unit_label("l") == "L"
        assert unit_label("dozen") == "dz"
        assert unit_label("bundle") == "bundle"

"""Tests for unit conversion tables."""

import pytest

from proofed_engine.units import (
    CALORIE_UNITS,
    SUGAR_UNITS,
    calorie_grams,
    is_egg,
    normalize_unit,
    parse_package_size,
    sugar_grams,
    weight_grams,
)


class TestNormalizeUnit:
    """Tests for normalize_unit function."""

    def test_lowercases_and_trims(self):
        assert normalize_unit("  Cup ") == "cup"

    def test_none_is_empty(self):
        assert normalize_unit(None) == ""


class TestSugarTable:
    """Tests for sugar gram conversion."""

    @pytest.mark.parametrize(
        "quantity,unit,expected",
        [
            (100, "g", 100),
            (1, "kg", 1000),
            (1, "cup", 200),
            (2, "tbsp", 25),
            (1, "tsp", 4),
            (1, "oz", 28.35),
            (1, "lb", 453.6),
            (50, "ml", 50),
        ],
    )
    def test_known_units(self, quantity, unit, expected):
        assert sugar_grams(quantity, unit) == pytest.approx(expected)

    def test_litre_any_case(self):
        """Litres convert regardless of how the unit is capitalised."""
        assert sugar_grams(1, "L") == 1000
        assert sugar_grams(1, "l") == 1000

    def test_count_units_carry_no_sugar(self):
        assert sugar_grams(2, "unit") == 0
        assert sugar_grams(2, "") == 0

    def test_unknown_unit_assumes_grams(self):
        assert sugar_grams(30, "pinch") == 30

    def test_case_insensitive(self):
        assert SUGAR_UNITS.factor("CUPS") == 200


class TestCalorieTable:
    """Tests for calorie gram conversion."""

    def test_volume_uses_water_density(self):
        assert calorie_grams("milk", 1, "cup") == 240
        assert calorie_grams("oil", 1, "tbsp") == 15
        assert calorie_grams("vanilla", 1, "tsp") == 5

    def test_unknown_unit_assumes_grams(self):
        assert CALORIE_UNITS.to_grams(3, "unit") == 3

    def test_eggs_by_count(self):
        assert calorie_grams("eggs", 2, "unit") == 100
        assert calorie_grams("Egg", 3, "") == 150
        assert calorie_grams("eggs", 2, "large") == 100

    def test_eggs_by_weight(self):
        assert calorie_grams("egg whites", 120, "g") == 120

    def test_eggnog_is_not_an_egg(self):
        assert not is_egg("eggnog")
        assert calorie_grams("eggnog", 2, "unit") == 2


class TestWeightGrams:
    """Tests for purchased product weights."""

    def test_kilograms(self):
        assert weight_grams(0.5, "kg") == 500

    def test_missing_unit_is_grams(self):
        assert weight_grams(120, None) == 120


class TestParsePackageSize:
    """Tests for parse_package_size function."""

    def test_grams(self):
        assert parse_package_size("397 g") == (397.0, "g")

    def test_no_space(self):
        assert parse_package_size("1.5kg") == (1.5, "kg")

    def test_comma_decimal(self):
        assert parse_package_size("1,5 l") == (1.5, "l")

    def test_approximate_prefix(self):
        assert parse_package_size("ca. 400g") == (400.0, "g")

    def test_empty(self):
        assert parse_package_size("") is None
        assert parse_package_size(None) is None

    def test_no_number(self):
        assert parse_package_size("family pack") is None

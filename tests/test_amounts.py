"""
Tests for amount parsing and unit standardization
"""

import pytest

from grocery_parser.core.amounts import (
    combine_plus_measurement,
    convert_to_standard_units,
    format_amount,
    normalize_fractions,
    parse_amount,
    standardize_unit,
)


class TestParseAmount:

    @pytest.mark.parametrize("text,expected", [
        ("1/2", 0.5),
        ("1 1/2", 1.5),
        ("2", 2.0),
        ("2.25", 2.25),
        ("2-3", 2.0),
        ("2 to 3", 2.0),
        ("three", 3.0),
        ("½", 0.5),
        ("1½", 1.5),
    ])
    def test_amount_forms(self, text, expected):
        """Fractions, mixed numbers, ranges and words all parse"""
        assert parse_amount(text) == pytest.approx(expected)

    def test_unparseable_uses_default(self):
        """Text without a number falls back to the default"""
        assert parse_amount("some") == 1.0
        assert parse_amount("", default=0.0) == 0.0
        assert parse_amount(None, default=0.0) == 0.0

    def test_zero_denominator(self):
        """A zero denominator does not raise"""
        assert parse_amount("1/0") == 1.0


class TestNormalizeFractions:

    def test_glyph_glued_to_digit(self):
        """A glyph directly after a digit becomes a mixed number"""
        assert normalize_fractions("1½ cups") == "1 1/2 cups"

    def test_fraction_slash(self):
        assert normalize_fractions("1⁄4 cup") == "1/4 cup"


class TestUnits:

    def test_synonyms_map_to_plural(self):
        """Abbreviations map to the canonical plural unit"""
        assert standardize_unit("tbsp", 2) == "tablespoons"
        assert standardize_unit("tsp.", 3) == "teaspoons"
        assert standardize_unit("lbs", 2) == "pounds"

    def test_singular_for_one(self):
        """Amount 1 uses the singular form"""
        assert standardize_unit("cups", 1) == "cup"
        assert standardize_unit("Tablespoon", 1) == "tablespoon"

    def test_unknown_unit_kept(self):
        assert standardize_unit("handful", 2) == "handful"
        assert standardize_unit("", 2) == ""

    def test_metric_upscaling(self):
        """Large metric amounts scale up; small ones are untouched"""
        assert convert_to_standard_units(1500, "grams") == (1.5, "kilograms")
        assert convert_to_standard_units(2000, "ml") == (2.0, "liters")
        assert convert_to_standard_units(500, "grams") == (500, "grams")

    def test_format_amount(self):
        assert format_amount(2.0) == "2"
        assert format_amount(2.5) == "2.5"


class TestPlusMeasurement:

    def test_cup_plus_tablespoons_becomes_cups(self):
        """1/4 cup plus 2 tablespoons is 18 teaspoons, i.e. 0.375 cups"""
        amount, unit, rest = combine_plus_measurement(0.25, "cups", "plus 2 tablespoons sugar")
        assert amount == pytest.approx(0.375)
        assert unit == "cups"
        assert rest == "sugar"

    def test_tablespoons_stay_tablespoons(self):
        amount, unit, rest = combine_plus_measurement(2.0, "tablespoons", "plus 1 tablespoon oil")
        assert amount == pytest.approx(3.0)
        assert unit == "tablespoons"
        assert rest == "oil"

    def test_odd_total_becomes_teaspoons(self):
        amount, unit, _ = combine_plus_measurement(1.0, "tablespoon", "plus 1 teaspoon salt")
        assert amount == pytest.approx(4.0)
        assert unit == "teaspoons"

    def test_without_plus_unchanged(self):
        assert combine_plus_measurement(1.0, "cup", "flour") == (1.0, "cup", "flour")

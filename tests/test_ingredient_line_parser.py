"""
Tests for single-line ingredient parsing
"""

import pytest

from grocery_parser.models.recipe import FOR_SERVING, TO_TASTE, GroceryCategory
from grocery_parser.parsers.ingredient_line_parser import parse_ingredient_from_string


class TestMeasuredLines:

    def test_mixed_fraction_with_prep_words(self):
        """Prep words go, the product descriptor stays"""
        ingredient = parse_ingredient_from_string("2 1/2 tbsp finely chopped fresh basil")
        assert ingredient.name == "fresh basil"
        assert ingredient.amount == 2.5
        assert ingredient.unit == "tablespoons"
        assert ingredient.category == GroceryCategory.produce

    def test_simple_measurement(self):
        ingredient = parse_ingredient_from_string("2 cups all-purpose flour")
        assert ingredient.name == "all-purpose flour"
        assert ingredient.amount == 2.0
        assert ingredient.unit == "cups"
        assert ingredient.category == GroceryCategory.pantry

    def test_fraction_amount(self):
        ingredient = parse_ingredient_from_string("1/2 cup milk")
        assert ingredient.amount == 0.5
        assert ingredient.unit == "cups"
        assert ingredient.category == GroceryCategory.dairy

    def test_size_word_is_the_unit(self):
        """'3 large eggs' keeps 'large' as the unit"""
        ingredient = parse_ingredient_from_string("3 large eggs")
        assert ingredient.name == "eggs"
        assert ingredient.amount == 3.0
        assert ingredient.unit == "large"

    def test_kosher_salt_collapses_to_salt(self):
        ingredient = parse_ingredient_from_string("1/2 teaspoon kosher salt")
        assert ingredient.name == "salt"
        assert ingredient.unit == "teaspoons"
        assert ingredient.category == GroceryCategory.pantry

    def test_stock_is_pantry(self):
        """Overrides beat the chicken keyword"""
        ingredient = parse_ingredient_from_string("1 cup chicken stock")
        assert ingredient.name == "chicken stock"
        assert ingredient.category == GroceryCategory.pantry

    def test_plus_measurement_combined(self):
        ingredient = parse_ingredient_from_string("1/4 cup plus 2 tablespoons sugar")
        assert ingredient.name == "sugar"
        assert ingredient.amount == pytest.approx(0.375)
        assert ingredient.unit == "cups"


class TestSpecialCases:

    def test_sized_can(self):
        """Container size goes into the unit and cans are Pantry"""
        ingredient = parse_ingredient_from_string("1 (14.5 oz) can diced tomatoes, drained")
        assert ingredient.name == "tomatoes"
        assert ingredient.amount == 1.0
        assert ingredient.unit == "14.5-ounce can"
        assert ingredient.category == GroceryCategory.pantry

    def test_sized_cans_plural(self):
        ingredient = parse_ingredient_from_string("2 (15-ounce) cans chickpeas, drained and rinsed")
        assert ingredient.name == "chickpeas"
        assert ingredient.amount == 2.0
        assert ingredient.unit == "15-ounce cans"

    def test_garlic_cloves(self):
        ingredient = parse_ingredient_from_string("3 large cloves garlic, minced")
        assert ingredient.name == "garlic"
        assert ingredient.amount == 3.0
        assert ingredient.unit == "large cloves"
        assert ingredient.category == GroceryCategory.produce

    def test_juice_of_lemon(self):
        ingredient = parse_ingredient_from_string("Juice of 1 lemon")
        assert ingredient.name == "Lemon Juice"
        assert ingredient.amount == 1.0
        assert ingredient.unit == "lemon"
        assert ingredient.category == GroceryCategory.produce

    def test_herb_sprigs(self):
        ingredient = parse_ingredient_from_string("2 sprigs fresh thyme")
        assert ingredient.name == "thyme"
        assert ingredient.amount == 2.0
        assert ingredient.unit == "sprigs"

    def test_pinch(self):
        ingredient = parse_ingredient_from_string("a pinch of salt")
        assert ingredient.name == "salt"
        assert ingredient.amount == 1.0
        assert ingredient.unit == "pinch"

    def test_sized_piece(self):
        ingredient = parse_ingredient_from_string("1 (1-inch) piece ginger")
        assert ingredient.name == "ginger"
        assert ingredient.unit == "1-inch piece"
        assert ingredient.category == GroceryCategory.produce


class TestCountsAndBareNames:

    def test_bare_count(self):
        ingredient = parse_ingredient_from_string("8 scallions")
        assert ingredient.name == "scallions"
        assert ingredient.amount == 8.0
        assert ingredient.unit == ""
        assert ingredient.category == GroceryCategory.produce

    def test_leading_container_becomes_unit(self):
        ingredient = parse_ingredient_from_string("2 knobs of butter")
        assert ingredient.name == "butter"
        assert ingredient.amount == 2.0
        assert ingredient.unit == "knobs"
        assert ingredient.category == GroceryCategory.dairy

    def test_fractional_produce_rounds_up(self):
        """Half an onion is still one onion to buy"""
        ingredient = parse_ingredient_from_string("1/2 onion")
        assert ingredient.name == "onion"
        assert ingredient.amount == 1.0

    def test_fractional_head_rounds_to_singular_unit(self):
        ingredient = parse_ingredient_from_string("1/2 head cabbage")
        assert ingredient.name == "cabbage"
        assert ingredient.amount == 1.0
        assert ingredient.unit == "head"
        assert ingredient.category == GroceryCategory.produce

    def test_beef_cut_is_meat(self):
        ingredient = parse_ingredient_from_string("1 lb top sirloin")
        assert ingredient.name == "top sirloin"
        assert ingredient.unit == "pound"
        assert ingredient.category == GroceryCategory.meat_and_seafood

    def test_top_as_part_of_a_name(self):
        """'Top' starts a cut of beef, not a direction"""
        ingredient = parse_ingredient_from_string("Top sirloin steak")
        assert ingredient is not None
        assert ingredient.name.lower() == "top sirloin steak"
        assert ingredient.category == GroceryCategory.meat_and_seafood

    def test_salt_without_amount_is_to_taste(self):
        ingredient = parse_ingredient_from_string("salt")
        assert ingredient.name == "salt"
        assert ingredient.amount == 0.0
        assert ingredient.unit == TO_TASTE

    def test_for_serving(self):
        ingredient = parse_ingredient_from_string("Fresh basil, for serving")
        assert ingredient.name == "fresh basil"
        assert ingredient.amount == 0.0
        assert ingredient.unit == FOR_SERVING

    def test_bare_name_defaults_to_one(self):
        ingredient = parse_ingredient_from_string("crispy shallots")
        assert ingredient.amount == 1.0
        assert ingredient.unit == ""

    @pytest.mark.parametrize("line", ["", "   ", "Preheat the oven to 350 degrees", "Bake for 25 minutes"])
    def test_non_ingredient_lines(self, line):
        """Empty lines and directions are not ingredients"""
        assert parse_ingredient_from_string(line) is None

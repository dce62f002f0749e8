"""
Tests for ingredient string parsing and normalization.
"""

import pytest

from groceries.ingredients import (
    merge_quantities,
    normalize_name,
    parse_ingredient,
    strip_preparation,
)


class TestParseIngredient:
    """Test splitting ingredient strings into quantity and name."""

    @pytest.mark.parametrize(
        "text, quantity, name",
        [
            ("2 cups flour", "2 cups", "Flour"),
            ("1 cup flour", "1 cup", "Flour"),
            ("1 egg", "1", "Egg"),
            ("2 eggs", "2", "Eggs"),
            ("1 1/2 cups milk", "1 1/2 cups", "Milk"),
            ("½ cup sugar", "½ cup", "Sugar"),
            ("400g spaghetti", "400 g", "Spaghetti"),
            ("1 tbsp. olive oil", "1 tbsp", "Olive oil"),
            ("2 cans chickpeas", "2 cans", "Chickpeas"),
        ],
    )
    def test_amount_and_unit(self, text, quantity, name):
        """Test that a leading amount and optional unit become the quantity."""
        parsed = parse_ingredient(text)
        assert parsed.quantity == quantity
        assert parsed.name == name
        assert parsed.original == text

    def test_unit_prefix_of_word_is_not_a_unit(self):
        """Test that 'g' in '2 garlic cloves' is not read as grams."""
        parsed = parse_ingredient("2 garlic cloves")
        assert parsed.quantity == "2"
        assert parsed.name == "Garlic cloves"

    def test_of_is_dropped(self):
        """Test that '2 cups of flour' yields the name 'Flour'."""
        assert parse_ingredient("2 cups of flour").name == "Flour"

    def test_no_amount(self):
        """Test that strings without an amount have an empty quantity."""
        parsed = parse_ingredient("salt to taste")
        assert parsed.quantity == ""
        assert parsed.name == "Salt to taste"

    def test_preparation_notes_removed(self):
        """Test that text after a comma or parenthesis is dropped."""
        assert parse_ingredient("1 onion, finely chopped").name == "Onion"
        assert parse_ingredient("2 eggs (beaten)").name == "Eggs"


class TestStripPreparation:
    """Test removal of preparation notes."""

    def test_comma(self):
        assert strip_preparation("2 cups flour, sifted") == "2 cups flour"

    def test_parenthesis(self):
        assert strip_preparation("1 can tomatoes (400g)") == "1 can tomatoes"

    def test_plain(self):
        assert strip_preparation("  basil ") == "basil"


class TestNormalizeName:
    """Test the merge key used by the aggregator."""

    def test_case_and_whitespace(self):
        """Test that case and whitespace differences share a key."""
        assert normalize_name("  Olive   Oil ") == normalize_name("olive oil") == "olive oil"

    def test_no_stemming(self):
        """Test that singular and plural names stay distinct."""
        assert normalize_name("Egg") != normalize_name("Eggs")

    def test_empty(self):
        assert normalize_name("") == ""
        assert normalize_name(None) == ""


class TestMergeQuantities:
    """Test combining free-text quantities."""

    def test_distinct_quantities_concatenated(self):
        assert merge_quantities("2 cups", "1 cup") == "2 cups, 1 cup"

    def test_duplicate_not_repeated(self):
        assert merge_quantities("2 cups, 1 cup", "1 cup") == "2 cups, 1 cup"

    def test_empty_values(self):
        assert merge_quantities("", "1") == "1"
        assert merge_quantities("1", "") == "1"
        assert merge_quantities("1", None) == "1"
        assert merge_quantities("", "") == ""

"""
Tests for grocery list ingredient aggregation.

Covers:
- Merging names that differ only in case/whitespace
- Empty inputs
- Recomputing after a meal is removed
- Category order and one category per ingredient
- Custom items merged into the aggregate
"""

import pytest

from groceries.aggregate import aggregate_ingredients
from groceries.categories import CATEGORY_ORDER
from groceries.models import CustomGroceryItem, GroceryMeal, RecipeSnapshot


def make_meal(title, ingredients, recipe_id=None, meal_plan_item_id=None):
    return GroceryMeal(
        id=f"meal-{meal_plan_item_id or title}",
        meal_plan_item_id=meal_plan_item_id or f"item-{title}",
        day=0,
        meal_slot="dinner",
        recipe=RecipeSnapshot(id=recipe_id or f"recipe-{title}", title=title, ingredients=ingredients),
    )


def all_items(categories):
    return [item for bucket in categories for item in bucket.items]


def find_item(categories, name):
    matches = [item for item in all_items(categories) if item.name.lower() == name.lower()]
    assert len(matches) == 1, f"expected exactly one {name!r}, got {matches}"
    return matches[0]


@pytest.fixture
def pancakes():
    return make_meal("Pancakes", ["2 cups flour", "1 egg"])


@pytest.fixture
def waffles():
    return make_meal("Waffles", ["1 cup flour", "2 eggs"])


class TestAggregateIngredients:
    """Test the aggregate transform."""

    def test_empty_input(self):
        """Test that no meals and no custom items produce no categories."""
        assert aggregate_ingredients([]) == []
        assert aggregate_ingredients([], []) == []

    def test_meal_without_ingredients(self):
        assert aggregate_ingredients([make_meal("Toast", [])]) == []

    def test_pancakes_and_waffles(self, pancakes, waffles):
        """Test merging the same ingredient across two recipes."""
        categories = aggregate_ingredients([pancakes, waffles])

        flour = find_item(categories, "Flour")
        assert flour.quantity == "2 cups, 1 cup"
        assert flour.recipes == ["Pancakes", "Waffles"]
        assert flour.recipe_ids == ["recipe-Pancakes", "recipe-Waffles"]

        # Singular and plural are matched literally
        egg = find_item(categories, "Egg")
        eggs = find_item(categories, "Eggs")
        assert egg.recipes == ["Pancakes"]
        assert eggs.recipes == ["Waffles"]

    @pytest.mark.parametrize(
        "first, second",
        [
            ("2 cups Flour", "1 cup flour"),
            ("2 cups FLOUR", "1 cup  flour "),
            ("1 Olive Oil", "2 olive   oil"),
            ("Fresh Basil", "fresh basil"),
        ],
    )
    def test_case_and_whitespace_variants_merge(self, first, second):
        """Test that names differing only in case/whitespace become one entry."""
        categories = aggregate_ingredients([
            make_meal("Recipe A", [first]),
            make_meal("Recipe B", [second]),
        ])

        items = all_items(categories)
        assert len(items) == 1
        assert items[0].recipes == ["Recipe A", "Recipe B"]

    def test_first_seen_name_is_kept(self):
        categories = aggregate_ingredients([
            make_meal("A", ["2 cups FLOUR"]),
            make_meal("B", ["1 cup flour"]),
        ])
        assert all_items(categories)[0].name == "FLOUR"

    def test_removing_meal_leaves_no_residue(self, pancakes, waffles):
        """Test that re-aggregating without a meal drops everything only it contributed."""
        before = aggregate_ingredients([pancakes, waffles])
        assert any("Waffles" in item.recipes for item in all_items(before))

        after = aggregate_ingredients([pancakes])

        for item in all_items(after):
            assert "Waffles" not in item.recipes
            assert "recipe-Waffles" not in item.recipe_ids
        assert find_item(after, "Flour").quantity == "2 cups"
        assert "eggs" not in [item.name.lower() for item in all_items(after)]

    def test_same_recipe_listed_once(self):
        """Test that a recipe planned twice is recorded once per ingredient."""
        categories = aggregate_ingredients([
            make_meal("Pancakes", ["1 cup flour"], recipe_id="r1", meal_plan_item_id="monday"),
            make_meal("Pancakes", ["1 cup flour"], recipe_id="r1", meal_plan_item_id="tuesday"),
        ])
        flour = find_item(categories, "Flour")
        assert flour.recipes == ["Pancakes"]
        assert flour.recipe_ids == ["r1"]
        assert flour.quantity == "1 cup"

    def test_categories_in_fixed_order(self):
        categories = aggregate_ingredients([
            make_meal("Mixed", ["1 tsp cumin", "1 cup rice", "100 g feta", "2 chicken breasts", "1 onion", "1 olive oil"]),
        ])
        names = [c.category for c in categories]
        assert names == CATEGORY_ORDER
        assert [c.emoji for c in categories] == ["🥬", "🥩", "🥛", "🌾", "🧂", "📦"]

    def test_each_ingredient_in_exactly_one_category(self, pancakes, waffles):
        categories = aggregate_ingredients([pancakes, waffles])
        names = [item.name.lower() for item in all_items(categories)]
        assert len(names) == len(set(names))

    def test_first_seen_order_within_category(self):
        categories = aggregate_ingredients([
            make_meal("A", ["1 carrot", "1 onion"]),
            make_meal("B", ["1 tomato", "1 carrot"]),
        ])
        produce = categories[0]
        assert produce.category == "produce"
        assert [item.name for item in produce.items] == ["Carrot", "Onion", "Tomato"]

    def test_blank_ingredient_strings_are_skipped(self):
        categories = aggregate_ingredients([make_meal("A", ["", "   ", "1 egg"])])
        assert [item.name for item in all_items(categories)] == ["Egg"]

    def test_inputs_are_not_mutated(self, pancakes, waffles):
        before = [m.model_dump() for m in (pancakes, waffles)]
        aggregate_ingredients([pancakes, waffles])
        assert [m.model_dump() for m in (pancakes, waffles)] == before


class TestCustomItems:
    """Test custom items in the aggregate."""

    def test_custom_item_merges_with_recipe_ingredient(self, pancakes):
        item = CustomGroceryItem(id="c1", name="flour", quantity="1 bag")
        flour = find_item(aggregate_ingredients([pancakes], [item]), "Flour")
        assert flour.quantity == "2 cups, 1 bag"
        assert flour.recipes == ["Pancakes"]

    def test_custom_item_only(self):
        item = CustomGroceryItem(id="c1", name="Paper towels", quantity="2 rolls")
        categories = aggregate_ingredients([], [item])
        assert len(categories) == 1
        assert categories[0].category == "other"
        assert categories[0].items[0].recipes == []

    def test_explicit_category_wins(self):
        item = CustomGroceryItem(id="c1", name="Oat milk", category="Dairy")
        categories = aggregate_ingredients([], [item])
        assert categories[0].category == "dairy"

    def test_non_standard_category_goes_last(self):
        categories = aggregate_ingredients(
            [make_meal("A", ["1 egg"])],
            [CustomGroceryItem(id="c1", name="Dish soap", category="household")],
        )
        assert [c.category for c in categories] == ["protein", "household"]
        assert categories[-1].emoji == "📦"

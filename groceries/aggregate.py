"""
Grocery list ingredient aggregation.

Merges the ingredient strings of every meal on a grocery list, plus the user's
custom items, into one categorized and deduplicated shopping list:

- Each ingredient string is parsed into a name and a free-text quantity
- Entries whose normalized names are equal are merged into one AggregatedIngredient,
  concatenating distinct quantities and recording each contributing recipe once
- Each merged entry gets exactly one category; categories come out in the fixed
  CATEGORY_ORDER and ingredients in first-seen order within a category

The transform is pure: it never mutates its inputs and is recomputed from scratch
on every read, so removing a meal can never leave stale ingredients behind.
"""

from typing import Dict, Iterable, List, Optional, Sequence

from .categories import CATEGORY_ORDER, categorize_ingredient, category_emoji
from .ingredients import merge_quantities, normalize_name, parse_ingredient
from .models import AggregatedIngredient, CategoryIngredients, CustomGroceryItem, GroceryMeal


class _Entry:
    """Mutable accumulator for one aggregated ingredient."""

    def __init__(self, name: str, quantity: str, category: str):
        self.name = name
        self.quantity = quantity
        self.category = category
        self.recipe_ids: List[str] = []
        self.recipes: List[str] = []

    def add_recipe(self, recipe_id: Optional[str], title: Optional[str]) -> None:
        if recipe_id and recipe_id not in self.recipe_ids:
            self.recipe_ids.append(recipe_id)
        if title and title not in self.recipes:
            self.recipes.append(title)

    def to_model(self) -> AggregatedIngredient:
        return AggregatedIngredient(
            name=self.name,
            quantity=self.quantity,
            recipe_ids=list(self.recipe_ids),
            recipes=list(self.recipes),
        )


def _add(
    entries: Dict[str, _Entry],
    name: str,
    quantity: Optional[str],
    category: Optional[str] = None,
) -> Optional[_Entry]:
    key = normalize_name(name)
    if not key:
        return None

    entry = entries.get(key)
    if entry is None:
        entry = _Entry(
            name=name.strip(),
            quantity=merge_quantities("", quantity),
            category=(category or "").strip().lower() or categorize_ingredient(name),
        )
        entries[key] = entry
    else:
        entry.quantity = merge_quantities(entry.quantity, quantity)
    return entry


def aggregate_ingredients(
    meals: Sequence[GroceryMeal],
    custom_items: Iterable[CustomGroceryItem] = (),
) -> List[CategoryIngredients]:
    """
    Aggregate meal ingredients and custom items into categorized buckets.

    Args:
        meals: Grocery meals in list order, each carrying a recipe snapshot
        custom_items: Manually added items, merged after all meal ingredients

    Returns:
        List of CategoryIngredients in display order. Empty categories are omitted,
        so an empty input yields an empty list.

    Example:
        Two meals "Pancakes" (["2 cups flour", "1 egg"]) and "Waffles"
        (["1 cup flour", "2 eggs"]) produce one "Flour" entry with quantity
        "2 cups, 1 cup" and recipes ["Pancakes", "Waffles"], plus separate "Egg"
        and "Eggs" entries (names are matched literally).
    """
    # dicts keep insertion order, which is the first-seen order
    entries: Dict[str, _Entry] = {}

    for meal in meals:
        recipe = meal.recipe
        for raw in recipe.ingredients or []:
            if not isinstance(raw, str) or not raw.strip():
                continue
            parsed = parse_ingredient(raw)
            entry = _add(entries, parsed.name, parsed.quantity)
            if entry is not None:
                entry.add_recipe(recipe.id, recipe.title)

    for item in custom_items:
        _add(entries, item.name, item.quantity, item.category)

    by_category: Dict[str, List[AggregatedIngredient]] = {}
    for entry in entries.values():
        by_category.setdefault(entry.category, []).append(entry.to_model())

    ordered = [c for c in CATEGORY_ORDER if c in by_category]
    # Categories outside the standard table (only possible via custom items) go last
    ordered += [c for c in by_category if c not in CATEGORY_ORDER]

    return [
        CategoryIngredients(category=c, emoji=category_emoji(c), items=by_category[c])
        for c in ordered
    ]

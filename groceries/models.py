"""
Grocery list, meal plan and recipe models.

This module defines the canonical schemas used throughout the meal planner backend.
All models use snake_case attribute names in Python and camelCase names on the wire
(e.g. ``meal_plan_item_id`` <-> ``mealPlanItemId``), which is what the frontend and
the API client expect.

# NOTE: The aggregated ingredient view is never stored. GroceryList only holds the
    inputs (meals and custom items); GroceryListView recomputes
    aggregated_ingredients every time it is built from a GroceryList.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MEAL_SLOTS = ("breakfast", "lunch", "dinner", "snack")


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base model: snake_case in Python, camelCase in JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecipeSnapshot(CamelModel):
    """Copy of a recipe's identity and ingredients at the time a meal was added."""
    id: str = Field(..., description="Recipe identifier")
    title: str = Field(..., description="Recipe title")
    ingredients: List[str] = Field(default_factory=list, description="Raw ingredient strings")


class GroceryMeal(CamelModel):
    """
    A recipe's ingredient contribution to a grocery list.

    Identity is meal_plan_item_id: adding the same meal plan item twice replaces
    the existing entry instead of duplicating it.
    """
    id: str = Field(..., description="Grocery meal identifier")
    meal_plan_item_id: str = Field(..., description="Meal plan item this meal was added from")
    day: int = Field(..., ge=0, le=6, description="Day of week, 0 = Sunday")
    meal_slot: str = Field(..., description="breakfast, lunch, dinner or snack")
    recipe: RecipeSnapshot
    added_at: datetime = Field(default_factory=utc_now)


class CustomGroceryItem(CamelModel):
    """Free-text grocery item added manually by the user."""
    id: str = Field(..., description="Custom item identifier")
    name: str = Field(..., min_length=1, description="Item name")
    quantity: Optional[str] = Field(None, description="Free-text quantity (e.g. '2 packs')")
    category: Optional[str] = Field(None, description="Category, auto-detected when not given")
    checked: bool = Field(default=False, description="Whether the item was ticked off")
    created_at: datetime = Field(default_factory=utc_now)


class ParsedIngredient(CamelModel):
    """Result of splitting a raw ingredient string into quantity and name."""
    original: str
    name: str
    quantity: str = ""


class AggregatedIngredient(CamelModel):
    """Deduplicated ingredient merged across recipes, with provenance."""
    name: str
    quantity: str = ""
    recipe_ids: List[str] = Field(default_factory=list)
    recipes: List[str] = Field(default_factory=list, description="Contributing recipe titles")


class CategoryIngredients(CamelModel):
    """Display bucket of aggregated ingredients."""
    category: str
    emoji: str
    items: List[AggregatedIngredient] = Field(default_factory=list)


class GroceryList(CamelModel):
    """
    Stored grocery list: one per user.

    Holds only the inputs of the aggregated view. Mutate through
    groceries.service so that updated_at and persistence stay consistent.
    """
    id: str
    user_id: str
    meals: List[GroceryMeal] = Field(default_factory=list)
    custom_items: List[CustomGroceryItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(frozen=False)

    def find_custom_item(self, item_id: str) -> Optional[CustomGroceryItem]:
        """Return the custom item with the given id, or None."""
        for item in self.custom_items:
            if item.id == item_id:
                return item
        return None

    def upsert_meal(self, meal: GroceryMeal) -> None:
        """Add a meal, replacing any meal with the same meal_plan_item_id in place."""
        for index, existing in enumerate(self.meals):
            if existing.meal_plan_item_id == meal.meal_plan_item_id:
                self.meals[index] = meal
                return
        self.meals.append(meal)

    def remove_meal(self, meal_plan_item_id: str) -> bool:
        """Remove the meal for a meal plan item. Returns True if something was removed."""
        remaining = [m for m in self.meals if m.meal_plan_item_id != meal_plan_item_id]
        removed = len(remaining) != len(self.meals)
        self.meals = remaining
        return removed


class GroceryListView(GroceryList):
    """Grocery list as returned by the API, including the aggregated ingredients."""
    aggregated_ingredients: List[CategoryIngredients] = Field(default_factory=list)

    @classmethod
    def from_grocery_list(cls, grocery_list: GroceryList) -> "GroceryListView":
        """Build the view, recomputing the aggregate from the list's current inputs."""
        # Local import: aggregate depends on this module
        from .aggregate import aggregate_ingredients

        data = grocery_list.model_dump()
        data["aggregated_ingredients"] = aggregate_ingredients(
            grocery_list.meals, grocery_list.custom_items
        )
        return cls(**data)


class Recipe(CamelModel):
    """Saved recipe."""
    id: str
    user_id: Optional[str] = None
    title: str = Field(..., min_length=1)
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    servings: Optional[int] = Field(None, ge=1)
    tags: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)

    def snapshot(self) -> RecipeSnapshot:
        """Recipe identity and ingredients as stored on a grocery meal."""
        return RecipeSnapshot(id=self.id, title=self.title, ingredients=list(self.ingredients))


class SavedRecipe(CamelModel):
    """A recipe bookmarked by a user."""
    id: str
    recipe: Recipe
    created_at: datetime = Field(default_factory=utc_now)


class MealPlanItem(CamelModel):
    """One (day, meal slot) cell of a weekly meal plan."""
    id: str
    meal_plan_id: str
    day: int = Field(..., ge=0, le=6)
    meal_slot: str
    recipe_id: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)


class MealPlan(CamelModel):
    """Weekly meal plan owned by a user."""
    id: str
    user_id: str
    week_start_date: str = Field(..., description="ISO date of the first day of the week")
    title: Optional[str] = None
    generation_method: str = Field(default="manual", description="manual, ai_generated or ai_assisted")
    items: List[MealPlanItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

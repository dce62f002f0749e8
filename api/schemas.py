"""
Pydantic schemas for FastAPI request bodies.

This module defines the request models used for API input validation. Response
bodies reuse the domain models from groceries.models directly (GroceryListView,
CustomGroceryItem, MealPlan, MealPlanItem, Recipe), which already serialize to the
camelCase shape the frontend expects.

# NOTE: Field names are camelCase on the wire (mealPlanItemIds, weekStartDate, ...)
    and snake_case in Python, via the CamelModel alias generator.
"""

from typing import List, Literal, Optional

from pydantic import ConfigDict, Field

from groceries.models import CamelModel

MealSlot = Literal["breakfast", "lunch", "dinner", "snack"]
GenerationMethod = Literal["manual", "ai_generated", "ai_assisted"]


class AddMealsRequest(CamelModel):
    """Body of POST /grocery-list/meals."""
    meal_plan_item_ids: List[str] = Field(..., min_length=1, description="Meal plan items to add")

    model_config = ConfigDict(
        json_schema_extra={"example": {"mealPlanItemIds": ["3f1c9a", "9b27de"]}}
    )


class AddCustomItemRequest(CamelModel):
    """Body of POST /grocery-list/items."""
    name: str = Field(..., min_length=1, description="Item name")
    quantity: Optional[str] = Field(None, description="Free-text quantity")
    category: Optional[str] = Field(None, description="Category (auto-detected if omitted)")

    model_config = ConfigDict(
        json_schema_extra={"example": {"name": "Paper towels", "quantity": "2 rolls"}}
    )


class UpdateCustomItemRequest(CamelModel):
    """Body of PATCH /grocery-list/items/{itemId}. All fields optional."""
    name: Optional[str] = None
    quantity: Optional[str] = None
    category: Optional[str] = None
    checked: Optional[bool] = None


class CreateMealPlanRequest(CamelModel):
    """Body of POST /meal-plans."""
    week_start_date: str = Field(..., description="ISO date of the first day of the week")
    title: Optional[str] = None
    generation_method: GenerationMethod = "manual"


class UpdateMealPlanRequest(CamelModel):
    """Body of PUT /meal-plans/{id}."""
    title: Optional[str] = None
    generation_method: Optional[GenerationMethod] = None


class UpdateMealPlanItemRequest(CamelModel):
    """Body of POST /meal-plans/{id}/items. Omitting recipeId clears the slot."""
    day: int = Field(..., ge=0, le=6, description="Day of week, 0 = Sunday")
    meal_slot: MealSlot
    recipe_id: Optional[str] = None


class CreateRecipeRequest(CamelModel):
    """Body of POST /recipes."""
    title: str = Field(..., min_length=1)
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    servings: Optional[int] = Field(None, ge=1)
    tags: List[str] = Field(default_factory=list)


class SuccessResponse(CamelModel):
    """Generic acknowledgement."""
    success: bool = True


class SaveRecipeResponse(CamelModel):
    """Result of POST /recipes/{id}/save."""
    success: bool = True
    is_saved: bool = True

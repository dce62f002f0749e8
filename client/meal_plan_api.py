"""
Meal plan endpoints.

Listing meal plans works for guests (auth="optional", a guest gets an empty list);
everything else requires a signed-in user. Plan items are keyed by day (0-6,
Sunday first) and meal slot.
"""

from typing import Any, Dict, List, Optional

from client.api_client import ApiClient, encode_path_segment
from client.errors import validation_error

MEAL_SLOTS = ("breakfast", "lunch", "dinner", "snack")
GENERATION_METHODS = ("manual", "ai_generated", "ai_assisted")


def validate_day(day: int) -> None:
    if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
        raise validation_error("Day must be between 0 (Sunday) and 6 (Saturday)", field="day")


def validate_meal_slot(meal_slot: str) -> None:
    if meal_slot not in MEAL_SLOTS:
        raise validation_error(
            f"Meal slot must be one of: {', '.join(MEAL_SLOTS)}",
            field="mealSlot",
        )


class MealPlanApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def _plan_path(self, plan_id: str) -> str:
        if not plan_id:
            raise validation_error("Meal plan id is required", field="id")
        return f"/meal-plans/{encode_path_segment(plan_id)}"

    def list(self) -> List[Dict[str, Any]]:
        return self.client.get("/meal-plans", auth="optional") or []

    def get(self, plan_id: str) -> Dict[str, Any]:
        return self.client.get(self._plan_path(plan_id))

    def create(
        self,
        week_start_date: str,
        title: Optional[str] = None,
        generation_method: str = "manual",
    ) -> Dict[str, Any]:
        if not week_start_date:
            raise validation_error("Week start date is required", field="weekStartDate")
        if generation_method not in GENERATION_METHODS:
            raise validation_error("Unknown generation method", field="generationMethod")
        body: Dict[str, Any] = {"weekStartDate": week_start_date, "generationMethod": generation_method}
        if title:
            body["title"] = title
        return self.client.post("/meal-plans", body)

    def update(
        self,
        plan_id: str,
        title: Optional[str] = None,
        generation_method: Optional[str] = None,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if title is not None:
            body["title"] = title
        if generation_method is not None:
            if generation_method not in GENERATION_METHODS:
                raise validation_error("Unknown generation method", field="generationMethod")
            body["generationMethod"] = generation_method
        return self.client.put(self._plan_path(plan_id), body)

    def delete(self, plan_id: str) -> Dict[str, Any]:
        return self.client.delete(self._plan_path(plan_id))

    def set_item(
        self,
        plan_id: str,
        day: int,
        meal_slot: str,
        recipe_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Put a recipe in a (day, meal slot) cell; recipe_id=None clears it."""
        validate_day(day)
        validate_meal_slot(meal_slot)
        body: Dict[str, Any] = {"day": day, "mealSlot": meal_slot}
        if recipe_id:
            body["recipeId"] = recipe_id
        return self.client.post(f"{self._plan_path(plan_id)}/items", body)

    def remove_item(self, plan_id: str, item_id: str) -> Dict[str, Any]:
        if not item_id:
            raise validation_error("Meal plan item id is required", field="itemId")
        return self.client.delete(f"{self._plan_path(plan_id)}/items/{encode_path_segment(item_id)}")

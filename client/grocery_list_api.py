"""
Grocery list endpoints.

All endpoints require a signed-in user (auth="required"). Responses are returned
as the decoded JSON dicts produced by the backend (camelCase keys).
"""

from typing import Any, Dict, List, Optional

from client.api_client import ApiClient, encode_path_segment
from client.errors import validation_error

UPDATABLE_ITEM_FIELDS = ("name", "quantity", "category", "checked")


class GroceryListApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def get(self) -> Dict[str, Any]:
        """Current user's grocery list with aggregatedIngredients."""
        return self.client.get("/grocery-list")

    def clear(self) -> None:
        self.client.delete("/grocery-list")

    def add_meals(self, meal_plan_item_ids: List[str]) -> Dict[str, Any]:
        """
        Add meal plan items to the grocery list.

        Raises:
            AppError: VALIDATION (field "mealPlanItemIds") if no ids are given;
                otherwise whatever the request raises
        """
        ids = [i for i in meal_plan_item_ids or [] if i]
        if not ids:
            raise validation_error("Select at least one meal to add", field="mealPlanItemIds")
        return self.client.post("/grocery-list/meals", {"mealPlanItemIds": ids})

    def remove_meal(self, meal_plan_item_id: str) -> None:
        if not meal_plan_item_id:
            raise validation_error("Meal plan item id is required", field="mealPlanItemId")
        self.client.delete(f"/grocery-list/meals/{encode_path_segment(meal_plan_item_id)}")

    def add_custom_item(
        self,
        name: str,
        quantity: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Dict[str, Any]:
        if not name or not name.strip():
            raise validation_error("Item name is required", field="name")
        body: Dict[str, Any] = {"name": name.strip()}
        if quantity:
            body["quantity"] = quantity
        if category:
            body["category"] = category
        return self.client.post("/grocery-list/items", body)

    def update_custom_item(self, item_id: str, **changes) -> Dict[str, Any]:
        """
        Patch a custom item. Accepts name, quantity, category and checked.

        Example:
            api.update_custom_item(item_id, checked=True)
        """
        unknown = set(changes) - set(UPDATABLE_ITEM_FIELDS)
        if unknown:
            raise validation_error(f"Unknown field: {sorted(unknown)[0]}", field=sorted(unknown)[0])
        if "name" in changes and (not changes["name"] or not str(changes["name"]).strip()):
            raise validation_error("Item name is required", field="name")
        return self.client.patch(f"/grocery-list/items/{encode_path_segment(item_id)}", changes)

    def delete_custom_item(self, item_id: str) -> None:
        self.client.delete(f"/grocery-list/items/{encode_path_segment(item_id)}")

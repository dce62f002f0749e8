"""
Grocery list operations.

One grocery list per user, created lazily on first access. Every read returns a
GroceryListView whose aggregated_ingredients are recomputed from the list's current
meals and custom items, so adding or removing a meal is always reflected in full.

All functions take the authenticated user's id; ownership of meal plan items and
custom items is enforced here.
"""

import logging
from typing import List, Optional
from uuid import uuid4

from . import meal_plans, recipes, store
from .categories import categorize_ingredient
from .errors import GroceryNotFoundError, GroceryValidationError
from .events import (
    log_custom_item_changed,
    log_grocery_list_cleared,
    log_grocery_meal_removed,
    log_grocery_meals_added,
)
from .models import CustomGroceryItem, GroceryList, GroceryListView, GroceryMeal, utc_now

logger = logging.getLogger(__name__)

# Fields of a custom item that update_custom_item accepts
UPDATABLE_ITEM_FIELDS = ("name", "quantity", "category", "checked")


def _get_or_create_record(user_id: str) -> GroceryList:
    grocery_list = store.get_grocery_list(user_id)
    if grocery_list is None:
        grocery_list = GroceryList(id=uuid4().hex, user_id=user_id)
        store.save_grocery_list(grocery_list)
        logger.info("Created grocery list %s for user %s", grocery_list.id, user_id)
    return grocery_list


def _save(grocery_list: GroceryList) -> None:
    grocery_list.updated_at = utc_now()
    store.save_grocery_list(grocery_list)


def get_or_create_grocery_list(user_id: str) -> GroceryListView:
    """
    Get the user's grocery list, creating an empty one on first access.

    Returns:
        GroceryListView with freshly aggregated ingredients
    """
    return GroceryListView.from_grocery_list(_get_or_create_record(user_id))


def add_meals(user_id: str, meal_plan_item_ids: List[str]) -> GroceryListView:
    """
    Add meal plan items to the user's grocery list.

    Each item's recipe is snapshotted (id, title, ingredients) at the time it is
    added. Adding an item that is already on the list replaces its entry. Unknown
    items, other users' items and items without a recipe are skipped.

    Args:
        user_id: Owner of the grocery list
        meal_plan_item_ids: Meal plan item ids to add (at least one)

    Returns:
        Updated GroceryListView

    Raises:
        GroceryValidationError: If meal_plan_item_ids is empty
    """
    if not meal_plan_item_ids:
        raise GroceryValidationError(
            "mealPlanItemIds is required and must not be empty", field="mealPlanItemIds"
        )

    grocery_list = _get_or_create_record(user_id)
    items = meal_plans.find_meal_plan_items(user_id, meal_plan_item_ids)

    found = {item.id for item in items}
    for missing in (i for i in meal_plan_item_ids if i not in found):
        logger.warning("Meal plan item %s not found for user %s, skipping", missing, user_id)

    added = 0
    for item in items:
        if not item.recipe_id:
            logger.warning("Meal plan item %s has no recipe, skipping", item.id)
            continue
        try:
            recipe = recipes.get_recipe(item.recipe_id)
        except GroceryNotFoundError:
            logger.warning("Meal plan item %s references missing recipe %s, skipping", item.id, item.recipe_id)
            continue

        grocery_list.upsert_meal(GroceryMeal(
            id=uuid4().hex,
            meal_plan_item_id=item.id,
            day=item.day,
            meal_slot=item.meal_slot,
            recipe=recipe.snapshot(),
        ))
        added += 1

    if added:
        _save(grocery_list)
    logger.info("Added %d of %d meals to grocery list of user %s", added, len(meal_plan_item_ids), user_id)
    log_grocery_meals_added(user_id, list(meal_plan_item_ids), added)

    return GroceryListView.from_grocery_list(grocery_list)


def remove_meal(user_id: str, meal_plan_item_id: str) -> None:
    """Remove a meal from the user's grocery list. No-op if it is not on the list."""
    grocery_list = store.get_grocery_list(user_id)
    if grocery_list is None:
        return

    removed = grocery_list.remove_meal(meal_plan_item_id)
    if removed:
        _save(grocery_list)
    log_grocery_meal_removed(user_id, meal_plan_item_id, removed)


def remove_meal_plan_item_references(meal_plan_item_ids: List[str]) -> int:
    """
    Drop grocery meals that reference deleted meal plan items, across all lists.

    Returns:
        Number of grocery meals removed
    """
    if not meal_plan_item_ids:
        return 0

    removed_total = 0
    for user_id in store.list_user_ids():
        grocery_list = store.get_grocery_list(user_id)
        if grocery_list is None:
            continue
        removed = sum(1 for item_id in meal_plan_item_ids if grocery_list.remove_meal(item_id))
        if removed:
            _save(grocery_list)
            removed_total += removed

    if removed_total:
        logger.info("Removed %d grocery meals referencing deleted meal plan items", removed_total)
    return removed_total


def add_custom_item(
    user_id: str,
    name: str,
    quantity: Optional[str] = None,
    category: Optional[str] = None,
) -> CustomGroceryItem:
    """
    Add a free-text item to the user's grocery list.

    The category is auto-detected from the name when not given.

    Raises:
        GroceryValidationError: If the name is blank
    """
    if not name or not name.strip():
        raise GroceryValidationError("Item name is required", field="name")

    grocery_list = _get_or_create_record(user_id)
    item = CustomGroceryItem(
        id=uuid4().hex,
        name=name.strip(),
        quantity=quantity or None,
        category=(category or "").strip().lower() or categorize_ingredient(name),
    )
    grocery_list.custom_items.append(item)
    _save(grocery_list)

    log_custom_item_changed(user_id, "added", item.id)
    return item


def update_custom_item(user_id: str, item_id: str, **changes) -> CustomGroceryItem:
    """
    Partially update a custom item.

    Args:
        user_id: Owner of the grocery list
        item_id: Custom item id
        **changes: Any of name, quantity, category, checked. None values are ignored.

    Raises:
        GroceryNotFoundError: If the user has no list or the item is not on it
        GroceryValidationError: On unknown fields or a blank name
    """
    unknown = set(changes) - set(UPDATABLE_ITEM_FIELDS)
    if unknown:
        raise GroceryValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")

    grocery_list = store.get_grocery_list(user_id)
    if grocery_list is None:
        raise GroceryNotFoundError("Grocery list not found")

    item = grocery_list.find_custom_item(item_id)
    if item is None:
        raise GroceryNotFoundError("Custom item not found")

    updates = {k: v for k, v in changes.items() if v is not None}
    if "name" in updates:
        if not str(updates["name"]).strip():
            raise GroceryValidationError("Item name must not be blank", field="name")
        updates["name"] = updates["name"].strip()
    if "category" in updates:
        updates["category"] = updates["category"].strip().lower() or None

    for field, value in updates.items():
        setattr(item, field, value)
    _save(grocery_list)

    log_custom_item_changed(user_id, "updated", item_id, sorted(updates))
    return item


def delete_custom_item(user_id: str, item_id: str) -> None:
    """Delete a custom item. No-op if the list or item does not exist."""
    grocery_list = store.get_grocery_list(user_id)
    if grocery_list is None:
        return

    remaining = [i for i in grocery_list.custom_items if i.id != item_id]
    if len(remaining) == len(grocery_list.custom_items):
        return

    grocery_list.custom_items = remaining
    _save(grocery_list)
    log_custom_item_changed(user_id, "deleted", item_id)


def clear_grocery_list(user_id: str) -> None:
    """Delete the user's grocery list with all meals and custom items."""
    if store.get_grocery_list(user_id) is None:
        return

    store.delete_grocery_list(user_id)
    logger.info("Cleared grocery list of user %s", user_id)
    log_grocery_list_cleared(user_id)

"""
In-memory weekly meal plan store.

A meal plan belongs to one user and holds at most one item per (day, meal slot),
where day is 0-6 (Sunday first) and meal slot is one of MEAL_SLOTS. Meal plan
items are what users add to their grocery list: groceries.service snapshots the
item's recipe when it is added.
"""

import logging
from datetime import date
from typing import Dict, List, Optional
from uuid import uuid4

from . import recipes
from .errors import GroceryNotFoundError, GroceryValidationError
from .models import MEAL_SLOTS, MealPlan, MealPlanItem, utc_now

logger = logging.getLogger(__name__)

GENERATION_METHODS = ("manual", "ai_generated", "ai_assisted")

# In-memory store: meal_plan_id -> MealPlan
MEAL_PLAN_STORE: Dict[str, MealPlan] = {}


def validate_day(day: int) -> int:
    """Return day if it is 0-6 (Sunday-Saturday), else raise GroceryValidationError."""
    if not isinstance(day, int) or isinstance(day, bool) or not 0 <= day <= 6:
        raise GroceryValidationError(f"Invalid day: {day!r}. Expected 0-6 (Sunday-Saturday)", field="day")
    return day


def validate_meal_slot(meal_slot: str) -> str:
    """Return the lower-cased meal slot if valid, else raise GroceryValidationError."""
    slot = (meal_slot or "").strip().lower()
    if slot not in MEAL_SLOTS:
        raise GroceryValidationError(
            f"Invalid meal slot: {meal_slot!r}. Valid slots: {', '.join(MEAL_SLOTS)}",
            field="mealSlot",
        )
    return slot


def _validate_generation_method(method: str) -> str:
    if method not in GENERATION_METHODS:
        raise GroceryValidationError(
            f"Invalid generation method: {method!r}. Valid methods: {', '.join(GENERATION_METHODS)}",
            field="generationMethod",
        )
    return method


def create_meal_plan(
    user_id: str,
    week_start_date: str,
    title: Optional[str] = None,
    generation_method: str = "manual",
) -> MealPlan:
    """
    Create an empty meal plan for a week.

    Args:
        user_id: Owner of the plan
        week_start_date: ISO date (YYYY-MM-DD) of the first day of the week
        title: Optional display title
        generation_method: "manual", "ai_generated" or "ai_assisted"

    Raises:
        GroceryValidationError: If the date or generation method is invalid
    """
    try:
        week_start = date.fromisoformat(week_start_date[:10])
    except (TypeError, ValueError) as e:
        raise GroceryValidationError(
            f"Invalid weekStartDate: {week_start_date!r}. Expected an ISO date", field="weekStartDate"
        ) from e

    plan = MealPlan(
        id=uuid4().hex,
        user_id=user_id,
        week_start_date=week_start.isoformat(),
        title=title,
        generation_method=_validate_generation_method(generation_method),
    )
    MEAL_PLAN_STORE[plan.id] = plan
    logger.info("Meal plan %s created for user %s (week of %s)", plan.id, user_id, plan.week_start_date)
    return plan


def list_meal_plans(user_id: str) -> List[MealPlan]:
    """All meal plans of a user, ordered by week start date."""
    plans = [p for p in MEAL_PLAN_STORE.values() if p.user_id == user_id]
    return sorted(plans, key=lambda p: p.week_start_date)


def get_meal_plan(user_id: str, plan_id: str) -> MealPlan:
    """
    Get one of the user's meal plans.

    Raises:
        GroceryNotFoundError: If the plan does not exist or belongs to another user
    """
    plan = MEAL_PLAN_STORE.get(plan_id)
    if plan is None or plan.user_id != user_id:
        raise GroceryNotFoundError(f"Meal plan not found: {plan_id}")
    return plan


def update_meal_plan(
    user_id: str,
    plan_id: str,
    title: Optional[str] = None,
    generation_method: Optional[str] = None,
) -> MealPlan:
    """Update the title and/or generation method of a meal plan."""
    plan = get_meal_plan(user_id, plan_id)
    if title is not None:
        plan.title = title
    if generation_method is not None:
        plan.generation_method = _validate_generation_method(generation_method)
    plan.updated_at = utc_now()
    return plan


def delete_meal_plan(user_id: str, plan_id: str) -> List[str]:
    """
    Delete a meal plan.

    Returns:
        Ids of the meal plan items that were deleted with it
    """
    plan = get_meal_plan(user_id, plan_id)
    del MEAL_PLAN_STORE[plan.id]
    logger.info("Meal plan %s deleted for user %s", plan_id, user_id)
    return [item.id for item in plan.items]


def set_meal_plan_item(
    user_id: str,
    plan_id: str,
    day: int,
    meal_slot: str,
    recipe_id: Optional[str] = None,
) -> Optional[MealPlanItem]:
    """
    Put a recipe into a (day, meal slot) cell of a plan.

    An existing item in the same cell keeps its id and gets the new recipe. Passing
    no recipe_id clears the cell (see clear_meal_plan_cell).

    Returns:
        The created or updated MealPlanItem, or None when the cell was cleared

    Raises:
        GroceryValidationError: Invalid day or meal slot
        GroceryNotFoundError: Unknown plan or recipe
    """
    if not recipe_id:
        clear_meal_plan_cell(user_id, plan_id, day, meal_slot)
        return None

    plan = get_meal_plan(user_id, plan_id)
    day = validate_day(day)
    slot = validate_meal_slot(meal_slot)
    recipes.get_recipe(recipe_id)

    existing = next((i for i in plan.items if i.day == day and i.meal_slot == slot), None)

    if existing is not None:
        existing.recipe_id = recipe_id
        item = existing
    else:
        item = MealPlanItem(id=uuid4().hex, meal_plan_id=plan.id, day=day, meal_slot=slot, recipe_id=recipe_id)
        plan.items.append(item)

    plan.updated_at = utc_now()
    return item


def clear_meal_plan_cell(user_id: str, plan_id: str, day: int, meal_slot: str) -> Optional[str]:
    """
    Remove whatever item occupies a (day, meal slot) cell.

    Returns:
        Id of the removed item, or None if the cell was already empty
    """
    plan = get_meal_plan(user_id, plan_id)
    day = validate_day(day)
    slot = validate_meal_slot(meal_slot)

    existing = next((i for i in plan.items if i.day == day and i.meal_slot == slot), None)
    if existing is None:
        return None
    plan.items.remove(existing)
    plan.updated_at = utc_now()
    return existing.id


def remove_meal_plan_item(user_id: str, plan_id: str, item_id: str) -> bool:
    """Remove an item from a plan. Returns True if the item existed."""
    plan = get_meal_plan(user_id, plan_id)
    remaining = [i for i in plan.items if i.id != item_id]
    removed = len(remaining) != len(plan.items)
    if removed:
        plan.items = remaining
        plan.updated_at = utc_now()
    return removed


def find_meal_plan_items(user_id: str, item_ids: List[str]) -> List[MealPlanItem]:
    """
    Look up meal plan items owned by a user.

    Returns:
        Items in the order of item_ids; unknown ids and other users' items are skipped
    """
    by_id: Dict[str, MealPlanItem] = {}
    for plan in MEAL_PLAN_STORE.values():
        if plan.user_id != user_id:
            continue
        for item in plan.items:
            by_id[item.id] = item
    return [by_id[i] for i in item_ids if i in by_id]


def clear_meal_plans() -> None:
    """Drop all meal plans (useful for testing)."""
    MEAL_PLAN_STORE.clear()

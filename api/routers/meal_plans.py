"""
Meal plan router.

Endpoints:
- GET    /meal-plans                      - List the user's plans (guests get an empty list)
- POST   /meal-plans                      - Create a plan
- GET    /meal-plans/{planId}             - Get a plan
- PUT    /meal-plans/{planId}             - Update title / generation method
- DELETE /meal-plans/{planId}             - Delete a plan
- POST   /meal-plans/{planId}/items       - Set the recipe of a (day, mealSlot) cell
- DELETE /meal-plans/{planId}/items/{id}  - Remove an item

Deleting items (directly, by clearing their cell or with their plan) also removes
them from grocery lists.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from api.auth import get_current_user_id, get_optional_user_id
from api.schemas import (
    CreateMealPlanRequest,
    SuccessResponse,
    UpdateMealPlanItemRequest,
    UpdateMealPlanRequest,
)
from groceries import meal_plans, service
from groceries.errors import GroceryNotFoundError, GroceryValidationError
from groceries.models import MealPlan

router = APIRouter(prefix="/meal-plans", tags=["meal-plans"])


def _not_found(e: GroceryNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _bad_request(e: GroceryValidationError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("", response_model=List[MealPlan], summary="List meal plans")
def list_meal_plans(user_id: Optional[str] = Depends(get_optional_user_id)) -> List[MealPlan]:
    if user_id is None:
        return []
    return meal_plans.list_meal_plans(user_id)


@router.post(
    "",
    response_model=MealPlan,
    status_code=status.HTTP_201_CREATED,
    summary="Create a meal plan",
)
def create_meal_plan(
    body: CreateMealPlanRequest,
    user_id: str = Depends(get_current_user_id),
) -> MealPlan:
    try:
        return meal_plans.create_meal_plan(
            user_id,
            body.week_start_date,
            title=body.title,
            generation_method=body.generation_method,
        )
    except GroceryValidationError as e:
        raise _bad_request(e) from e


@router.get("/{plan_id}", response_model=MealPlan, summary="Get a meal plan")
def get_meal_plan(plan_id: str, user_id: str = Depends(get_current_user_id)) -> MealPlan:
    try:
        return meal_plans.get_meal_plan(user_id, plan_id)
    except GroceryNotFoundError as e:
        raise _not_found(e) from e


@router.put("/{plan_id}", response_model=MealPlan, summary="Update a meal plan")
def update_meal_plan(
    plan_id: str,
    body: UpdateMealPlanRequest,
    user_id: str = Depends(get_current_user_id),
) -> MealPlan:
    try:
        return meal_plans.update_meal_plan(
            user_id, plan_id, title=body.title, generation_method=body.generation_method
        )
    except GroceryNotFoundError as e:
        raise _not_found(e) from e


@router.delete("/{plan_id}", response_model=SuccessResponse, summary="Delete a meal plan")
def delete_meal_plan(plan_id: str, user_id: str = Depends(get_current_user_id)) -> SuccessResponse:
    try:
        item_ids = meal_plans.delete_meal_plan(user_id, plan_id)
    except GroceryNotFoundError as e:
        raise _not_found(e) from e
    service.remove_meal_plan_item_references(item_ids)
    return SuccessResponse()


@router.post("/{plan_id}/items", response_model=SuccessResponse, summary="Add or update a meal plan item")
def set_meal_plan_item(
    plan_id: str,
    body: UpdateMealPlanItemRequest,
    user_id: str = Depends(get_current_user_id),
) -> SuccessResponse:
    cleared_id = None
    try:
        if body.recipe_id:
            meal_plans.set_meal_plan_item(user_id, plan_id, body.day, body.meal_slot, body.recipe_id)
        else:
            cleared_id = meal_plans.clear_meal_plan_cell(user_id, plan_id, body.day, body.meal_slot)
    except GroceryNotFoundError as e:
        raise _not_found(e) from e
    except GroceryValidationError as e:
        raise _bad_request(e) from e
    if cleared_id:
        service.remove_meal_plan_item_references([cleared_id])
    return SuccessResponse()


@router.delete(
    "/{plan_id}/items/{item_id}",
    response_model=SuccessResponse,
    summary="Remove a meal plan item",
)
def remove_meal_plan_item(
    plan_id: str,
    item_id: str,
    user_id: str = Depends(get_current_user_id),
) -> SuccessResponse:
    try:
        removed = meal_plans.remove_meal_plan_item(user_id, plan_id, item_id)
    except GroceryNotFoundError as e:
        raise _not_found(e) from e
    if removed:
        service.remove_meal_plan_item_references([item_id])
    return SuccessResponse(success=removed)

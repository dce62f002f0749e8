"""
Grocery list router.

Endpoints (all require a signed-in user):
- GET    /grocery-list                        - Get (or lazily create) the user's list
- DELETE /grocery-list                        - Clear the list
- POST   /grocery-list/meals                  - Add meal plan items
- DELETE /grocery-list/meals/{mealPlanItemId} - Remove a meal
- POST   /grocery-list/items                  - Add a custom item
- PATCH  /grocery-list/items/{itemId}         - Update a custom item
- DELETE /grocery-list/items/{itemId}         - Delete a custom item

Responses that contain the list always carry freshly aggregated ingredients.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.auth import get_current_user_id
from api.schemas import AddCustomItemRequest, AddMealsRequest, UpdateCustomItemRequest
from groceries import service
from groceries.errors import GroceryNotFoundError, GroceryValidationError
from groceries.models import CustomGroceryItem, GroceryListView

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/grocery-list", tags=["grocery-list"])


@router.get(
    "",
    response_model=GroceryListView,
    summary="Get the user's grocery list",
    description="Returns the grocery list of the signed-in user, creating an empty one on first access.",
)
def get_grocery_list(user_id: str = Depends(get_current_user_id)) -> GroceryListView:
    try:
        return service.get_or_create_grocery_list(user_id)
    except Exception as e:
        logger.error("Error getting grocery list for user %s: %s", user_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve grocery list",
        ) from e


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Clear the grocery list",
)
def clear_grocery_list(user_id: str = Depends(get_current_user_id)) -> Response:
    service.clear_grocery_list(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/meals",
    response_model=GroceryListView,
    summary="Add meals to the grocery list",
    description="Snapshots the recipes of the given meal plan items onto the list. "
                "Items already on the list are replaced, not duplicated.",
)
def add_meals(
    body: AddMealsRequest,
    user_id: str = Depends(get_current_user_id),
) -> GroceryListView:
    try:
        return service.add_meals(user_id, body.meal_plan_item_ids)
    except GroceryValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.delete(
    "/meals/{meal_plan_item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a meal from the grocery list",
)
def remove_meal(
    meal_plan_item_id: str,
    user_id: str = Depends(get_current_user_id),
) -> Response:
    service.remove_meal(user_id, meal_plan_item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/items",
    response_model=CustomGroceryItem,
    status_code=status.HTTP_201_CREATED,
    summary="Add a custom item to the grocery list",
)
def add_custom_item(
    body: AddCustomItemRequest,
    user_id: str = Depends(get_current_user_id),
) -> CustomGroceryItem:
    try:
        return service.add_custom_item(user_id, body.name, body.quantity, body.category)
    except GroceryValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.patch(
    "/items/{item_id}",
    response_model=CustomGroceryItem,
    summary="Update a custom item",
)
def update_custom_item(
    item_id: str,
    body: UpdateCustomItemRequest,
    user_id: str = Depends(get_current_user_id),
) -> CustomGroceryItem:
    try:
        return service.update_custom_item(user_id, item_id, **body.model_dump(exclude_none=True))
    except GroceryNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except GroceryValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.delete(
    "/items/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a custom item",
)
def delete_custom_item(
    item_id: str,
    user_id: str = Depends(get_current_user_id),
) -> Response:
    service.delete_custom_item(user_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

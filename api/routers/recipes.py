"""
Recipe router.

Endpoints:
- POST   /recipes             - Create a recipe (signed-in users)
- GET    /recipes/saved       - The user's saved recipes
- GET    /recipes/{id}        - Get a recipe (guests allowed)
- POST   /recipes/{id}/save   - Save a recipe (idempotent)
- DELETE /recipes/{id}/save   - Remove a recipe from the saved recipes
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from api.auth import get_current_user_id, get_optional_user_id
from api.schemas import CreateRecipeRequest, SaveRecipeResponse, SuccessResponse
from groceries import recipes
from groceries.errors import GroceryNotFoundError, GroceryValidationError
from groceries.models import Recipe, SavedRecipe

router = APIRouter(prefix="/recipes", tags=["recipes"])


def _not_found(e: GroceryNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "",
    response_model=Recipe,
    status_code=status.HTTP_201_CREATED,
    summary="Create a recipe",
)
def create_recipe(body: CreateRecipeRequest, user_id: str = Depends(get_current_user_id)) -> Recipe:
    try:
        return recipes.create_recipe(
            user_id,
            body.title,
            body.ingredients,
            instructions=body.instructions,
            servings=body.servings,
            tags=body.tags,
        )
    except GroceryValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


# Declared before /{recipe_id} so "saved" is not taken for an id
@router.get("/saved", response_model=List[SavedRecipe], summary="List saved recipes")
def list_saved_recipes(user_id: str = Depends(get_current_user_id)) -> List[SavedRecipe]:
    return recipes.list_saved_recipes(user_id)


@router.get("/{recipe_id}", response_model=Recipe, summary="Get a recipe")
def get_recipe(recipe_id: str, user_id: Optional[str] = Depends(get_optional_user_id)) -> Recipe:
    try:
        return recipes.get_recipe(recipe_id)
    except GroceryNotFoundError as e:
        raise _not_found(e) from e


@router.post("/{recipe_id}/save", response_model=SaveRecipeResponse, summary="Save a recipe")
def save_recipe(recipe_id: str, user_id: str = Depends(get_current_user_id)) -> SaveRecipeResponse:
    try:
        recipes.save_recipe(user_id, recipe_id)
    except GroceryNotFoundError as e:
        raise _not_found(e) from e
    return SaveRecipeResponse()


@router.delete("/{recipe_id}/save", response_model=SuccessResponse, summary="Unsave a recipe")
def unsave_recipe(recipe_id: str, user_id: str = Depends(get_current_user_id)) -> SuccessResponse:
    try:
        recipes.unsave_recipe(user_id, recipe_id)
    except GroceryNotFoundError as e:
        raise _not_found(e) from e
    return SuccessResponse()

"""
In-memory recipe store.

Recipes are the source of the ingredient lists that end up on grocery lists.
Recipes are readable by id by anyone (guests included). Signed-in users can
bookmark recipes; each user has at most one SavedRecipe per recipe.
"""

import logging
from typing import Dict, Iterable, List, Optional
from uuid import uuid4

from .errors import GroceryNotFoundError, GroceryValidationError
from .models import Recipe, SavedRecipe

logger = logging.getLogger(__name__)

# In-memory store: recipe_id -> Recipe
RECIPE_STORE: Dict[str, Recipe] = {}

# In-memory store: user_id -> {recipe_id -> SavedRecipe}, in save order
SAVED_RECIPE_STORE: Dict[str, Dict[str, SavedRecipe]] = {}


def create_recipe(
    user_id: Optional[str],
    title: str,
    ingredients: Iterable[str],
    instructions: Iterable[str] = (),
    servings: Optional[int] = None,
    tags: Iterable[str] = (),
) -> Recipe:
    """
    Store a new recipe.

    Blank ingredient lines are dropped.

    Raises:
        GroceryValidationError: If the title is blank
    """
    if not title or not title.strip():
        raise GroceryValidationError("Recipe title is required", field="title")

    recipe = Recipe(
        id=uuid4().hex,
        user_id=user_id,
        title=title.strip(),
        ingredients=[i.strip() for i in ingredients if i and i.strip()],
        instructions=list(instructions),
        servings=servings,
        tags=list(tags),
    )
    RECIPE_STORE[recipe.id] = recipe
    logger.info("Recipe %s created for user %s", recipe.id, user_id)
    return recipe


def get_recipe(recipe_id: str) -> Recipe:
    """
    Get a recipe by id.

    Raises:
        GroceryNotFoundError: If the recipe does not exist
    """
    recipe = RECIPE_STORE.get(recipe_id)
    if recipe is None:
        raise GroceryNotFoundError(f"Recipe not found: {recipe_id}")
    return recipe


def save_recipe(user_id: str, recipe_id: str) -> SavedRecipe:
    """
    Bookmark a recipe for a user.

    Saving an already saved recipe returns the existing SavedRecipe unchanged.

    Raises:
        GroceryNotFoundError: If the recipe does not exist
    """
    recipe = get_recipe(recipe_id)
    saved = SAVED_RECIPE_STORE.setdefault(user_id, {})
    if recipe_id in saved:
        return saved[recipe_id]

    saved[recipe_id] = SavedRecipe(id=uuid4().hex, recipe=recipe)
    logger.info("Recipe %s saved by user %s", recipe_id, user_id)
    return saved[recipe_id]


def unsave_recipe(user_id: str, recipe_id: str) -> None:
    """
    Remove a recipe from a user's saved recipes.

    Raises:
        GroceryNotFoundError: If the user has not saved the recipe
    """
    saved = SAVED_RECIPE_STORE.get(user_id, {})
    if saved.pop(recipe_id, None) is None:
        raise GroceryNotFoundError("Saved recipe not found")
    logger.info("Recipe %s unsaved by user %s", recipe_id, user_id)


def list_saved_recipes(user_id: str) -> List[SavedRecipe]:
    """A user's saved recipes, most recently saved first."""
    return list(reversed(list(SAVED_RECIPE_STORE.get(user_id, {}).values())))



def clear_recipes() -> None:
    """Drop all recipes and bookmarks (useful for testing)."""
    RECIPE_STORE.clear()
    SAVED_RECIPE_STORE.clear()

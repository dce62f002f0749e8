"""
Grocery list store keyed by user id.

This module persists the inputs of each user's grocery list (meals and custom
items). It uses the database when DATABASE_URL is set (see groceries.db) and an
in-memory dictionary otherwise. The in-memory store is suitable for development
and tests; lists are lost on server restart.

Lists are returned as copies: callers mutate the copy and hand it back through
save_grocery_list(), so a failed save never leaves half-applied changes behind.
"""

from typing import Dict, List, Optional

from .db import (
    db_delete_grocery_list,
    db_get_grocery_list,
    db_is_enabled,
    db_list_user_ids,
    db_save_grocery_list,
)
from .models import GroceryList

# In-memory store: user_id -> GroceryList
# Used when DATABASE_URL is not set
GROCERY_LIST_STORE: Dict[str, GroceryList] = {}


def get_grocery_list(user_id: str) -> Optional[GroceryList]:
    """
    Retrieve the stored grocery list of a user.

    Args:
        user_id: Owner of the list

    Returns:
        Copy of the stored GroceryList, or None if the user has no list yet
    """
    if db_is_enabled():
        data = db_get_grocery_list(user_id)
        return GroceryList(**data) if data is not None else None

    stored = GROCERY_LIST_STORE.get(user_id)
    return stored.model_copy(deep=True) if stored is not None else None


def save_grocery_list(grocery_list: GroceryList) -> None:
    """Insert or replace a user's grocery list."""
    if db_is_enabled():
        db_save_grocery_list(grocery_list.model_dump())
        return

    GROCERY_LIST_STORE[grocery_list.user_id] = grocery_list.model_copy(deep=True)


def delete_grocery_list(user_id: str) -> None:
    """Delete a user's grocery list. No-op if the user has none."""
    if db_is_enabled():
        db_delete_grocery_list(user_id)
        return

    GROCERY_LIST_STORE.pop(user_id, None)


def list_user_ids() -> List[str]:
    """Ids of all users that currently have a grocery list."""
    if db_is_enabled():
        return db_list_user_ids()

    return list(GROCERY_LIST_STORE.keys())


def clear_store() -> None:
    """Drop all in-memory grocery lists (useful for testing)."""
    GROCERY_LIST_STORE.clear()

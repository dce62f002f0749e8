"""
Database persistence layer for grocery lists.

This module provides an optional SQLAlchemy-backed persistence layer that is
enabled when the app starts with DATABASE_URL set (Postgres in production,
SQLite works for local runs and tests; see configure_database()). Until a URL is
configured, db_is_enabled() returns False and groceries.store keeps grocery lists in memory instead.

Only the inputs of a grocery list are stored (meals with their recipe snapshot and
custom items). The aggregated ingredient view is never persisted.

Tables:
- grocery_lists: one row per user
- grocery_meals: one row per (list, meal_plan_item_id)
- custom_grocery_items: manually added items
"""

import json
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import Session, declarative_base, relationship, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()

# Database engine and session factory (only set when a database URL is configured)
engine = None
SessionLocal = None


class GroceryListRow(Base):
    """Grocery list table - one row per user."""
    __tablename__ = "grocery_lists"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(255), unique=True, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    meals = relationship(
        "GroceryMealRow",
        back_populates="grocery_list",
        cascade="all, delete-orphan",
        order_by="GroceryMealRow.position",
    )
    custom_items = relationship(
        "CustomGroceryItemRow",
        back_populates="grocery_list",
        cascade="all, delete-orphan",
        order_by="CustomGroceryItemRow.position",
    )


class GroceryMealRow(Base):
    """Grocery meals table - recipe snapshot per meal plan item."""
    __tablename__ = "grocery_meals"

    id = Column(String(64), primary_key=True)
    list_id = Column(String(64), ForeignKey("grocery_lists.id", ondelete="CASCADE"), nullable=False, index=True)
    meal_plan_item_id = Column(String(64), nullable=False)
    day = Column(Integer, nullable=False)
    meal_slot = Column(String(20), nullable=False)
    recipe_id = Column(String(64), nullable=False)
    recipe_title = Column(String(500), nullable=False)
    recipe_ingredients = Column(Text, nullable=False)  # JSON array of strings
    added_at = Column(DateTime(timezone=True), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    grocery_list = relationship("GroceryListRow", back_populates="meals")

    # Same meal plan item can only be on a list once
    __table_args__ = (
        UniqueConstraint("list_id", "meal_plan_item_id", name="uq_grocery_meal_item"),
    )


class CustomGroceryItemRow(Base):
    """Custom grocery items table."""
    __tablename__ = "custom_grocery_items"

    id = Column(String(64), primary_key=True)
    list_id = Column(String(64), ForeignKey("grocery_lists.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(500), nullable=False)
    quantity = Column(String(255), nullable=True)
    category = Column(String(100), nullable=True)
    checked = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    grocery_list = relationship("GroceryListRow", back_populates="custom_items")


def configure_database(database_url: Optional[str]) -> None:
    """
    Create (or drop) the engine and session factory for a database URL.

    Passing None disables the database. In-memory SQLite URLs share a single
    connection so that every session sees the same data.
    """
    global engine, SessionLocal

    if engine is not None:
        engine.dispose()

    if not database_url:
        engine = None
        SessionLocal = None
        return

    kwargs: Dict[str, Any] = {"pool_pre_ping": True, "echo": False}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    logger.info("Database connection initialized")


def db_is_enabled() -> bool:
    """
    Check if database persistence is enabled.

    Returns:
        True if a database URL has been configured, False otherwise
    """
    return engine is not None and SessionLocal is not None


def init_db() -> None:
    """
    Initialize database tables (create if they don't exist).

    Safe to call multiple times.

    Raises:
        Exception: If database connection fails or table creation fails
    """
    if not db_is_enabled():
        logger.debug("Database not enabled, skipping init_db()")
        return

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized (or already exist)")
    except Exception as e:
        logger.error(f"Failed to initialize database tables: {e}")
        raise


def get_db_session() -> Session:
    """
    Get a database session.

    Raises:
        RuntimeError: If database is not enabled
    """
    if not db_is_enabled():
        raise RuntimeError("Database is not enabled. Set DATABASE_URL environment variable.")

    return SessionLocal()


# ============================================================================
# Grocery List Repository Functions
# ============================================================================

def _row_to_dict(row: GroceryListRow) -> Dict[str, Any]:
    return {
        "id": row.id,
        "user_id": row.user_id,
        "created_at": row.created_at,
        "updated_at": row.updated_at,
        "meals": [
            {
                "id": meal.id,
                "meal_plan_item_id": meal.meal_plan_item_id,
                "day": meal.day,
                "meal_slot": meal.meal_slot,
                "recipe": {
                    "id": meal.recipe_id,
                    "title": meal.recipe_title,
                    "ingredients": json.loads(meal.recipe_ingredients or "[]"),
                },
                "added_at": meal.added_at,
            }
            for meal in row.meals
        ],
        "custom_items": [
            {
                "id": item.id,
                "name": item.name,
                "quantity": item.quantity,
                "category": item.category,
                "checked": item.checked,
                "created_at": item.created_at,
            }
            for item in row.custom_items
        ],
    }


def db_get_grocery_list(user_id: str) -> Optional[Dict[str, Any]]:
    """
    Get a user's grocery list from the database.

    Args:
        user_id: Owner of the list

    Returns:
        Dictionary matching the GroceryList model structure, or None if the user
        has no list yet
    """
    if not db_is_enabled():
        return None

    db = get_db_session()
    try:
        row = db.query(GroceryListRow).filter(GroceryListRow.user_id == user_id).first()
        if row is None:
            return None
        return _row_to_dict(row)
    finally:
        db.close()


def db_save_grocery_list(data: Dict[str, Any]) -> None:
    """
    Insert or replace a grocery list with all of its meals and custom items.

    Existing meal and custom item rows of the list are deleted and re-inserted
    (replace pattern), so the stored rows always mirror the given list.

    Args:
        data: Dictionary matching the GroceryList model structure
    """
    if not db_is_enabled():
        return

    db = get_db_session()
    try:
        row = db.query(GroceryListRow).filter(GroceryListRow.user_id == data["user_id"]).first()
        if row is None:
            row = GroceryListRow(
                id=data["id"],
                user_id=data["user_id"],
                created_at=data["created_at"],
                updated_at=data["updated_at"],
            )
            db.add(row)
        else:
            row.updated_at = data["updated_at"]
            row.meals.clear()
            row.custom_items.clear()
            # Flush deletes before re-inserting rows with the same ids
            db.flush()

        for position, meal in enumerate(data.get("meals", [])):
            recipe = meal["recipe"]
            row.meals.append(GroceryMealRow(
                id=meal["id"],
                meal_plan_item_id=meal["meal_plan_item_id"],
                day=meal["day"],
                meal_slot=meal["meal_slot"],
                recipe_id=recipe["id"],
                recipe_title=recipe["title"],
                recipe_ingredients=json.dumps(recipe.get("ingredients", []), ensure_ascii=False),
                added_at=meal["added_at"],
                position=position,
            ))

        for position, item in enumerate(data.get("custom_items", [])):
            row.custom_items.append(CustomGroceryItemRow(
                id=item["id"],
                name=item["name"],
                quantity=item.get("quantity"),
                category=item.get("category"),
                checked=bool(item.get("checked", False)),
                created_at=item["created_at"],
                position=position,
            ))

        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Error saving grocery list in database: {e}")
        raise
    finally:
        db.close()


def db_delete_grocery_list(user_id: str) -> None:
    """
    Delete a user's grocery list together with its meals and custom items.

    Args:
        user_id: Owner of the list
    """
    if not db_is_enabled():
        return

    db = get_db_session()
    try:
        row = db.query(GroceryListRow).filter(GroceryListRow.user_id == user_id).first()
        if row is not None:
            db.delete(row)
            db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Error deleting grocery list in database: {e}")
        raise
    finally:
        db.close()


def db_list_user_ids() -> List[str]:
    """Return the ids of all users that have a grocery list."""
    if not db_is_enabled():
        return []

    db = get_db_session()
    try:
        return [user_id for (user_id,) in db.query(GroceryListRow.user_id).all()]
    finally:
        db.close()


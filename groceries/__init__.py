"""
Grocery list domain for the meal planner backend.

This package contains:
- models: Pydantic models for grocery lists, meals, custom items and the aggregated view
- ingredients: Ingredient string parsing and name normalization
- categories: Keyword based ingredient categorization
- aggregate: Cross-recipe ingredient aggregation
- store / db: Grocery list persistence (in-memory or SQLAlchemy)
- service: Grocery list operations used by the API
- recipes / meal_plans: Recipe and weekly meal plan stores
- events: Non-blocking analytics event logging
"""

"""
Python client for the meal planner API.

This package contains:
- api_client: ApiClient with auth modes, session refresh, retries and error reporting
- errors: AppError and the ErrorKind taxonomy
- retry: RetryPolicy and with_retry()
- session: SessionProvider implementations
- reporting: ErrorReporter sinks
- grocery_list_api, meal_plan_api, recipe_api: typed endpoint wrappers
"""

from client.api_client import ApiClient
from client.errors import AppError, ErrorKind
from client.grocery_list_api import GroceryListApi
from client.meal_plan_api import MealPlanApi
from client.recipe_api import RecipeApi
from client.retry import RetryPolicy, with_retry
from client.session import CallbackSessionProvider, StaticSessionProvider

__all__ = [
    "ApiClient",
    "AppError",
    "ErrorKind",
    "GroceryListApi",
    "MealPlanApi",
    "RecipeApi",
    "RetryPolicy",
    "with_retry",
    "CallbackSessionProvider",
    "StaticSessionProvider",
]

"""
FastAPI application for the meal planner API.

This module wires the REST API together:
- /grocery-list: the signed-in user's grocery list, meals and custom items
- /meal-plans: weekly meal plans keyed by day (0-6, Sunday first) and meal slot
- /recipes: saved recipes
- /health: liveness check

Authentication uses bearer tokens in the Authorization header (see api/auth.py).
Grocery list endpoints require a signed-in user; meal plan listing and recipe reads
also accept anonymous (guest) requests.

Run the API with:
    uvicorn api.main:app --reload --port 8888

Access API documentation at:
    http://localhost:8888/docs (Swagger UI)
    http://localhost:8888/redoc (ReDoc)
"""

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from api.config import CorsConfig, DatabaseConfig
from api.routers import grocery_list, meal_plans, recipes
from groceries.db import configure_database, db_is_enabled, init_db

logger = logging.getLogger(__name__)

# Track app start time for uptime calculation
_APP_START_TIME = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the database (if configured) on startup and release it on shutdown."""
    database_url = DatabaseConfig.get_database_url()
    if database_url:
        configure_database(database_url)
        init_db()
    logger.info("Meal planner API started (database=%s)", "enabled" if db_is_enabled() else "in-memory")
    yield
    if database_url:
        configure_database(None)


app = FastAPI(
    title="Meal Planner API",
    description="Backend API for recipes, weekly meal plans and aggregated grocery lists",
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "grocery-list",
            "description": "Per-user grocery list with ingredients aggregated across planned meals.",
        },
        {
            "name": "meal-plans",
            "description": "Weekly meal plans: one recipe per day and meal slot.",
        },
        {
            "name": "recipes",
            "description": "Saved recipes.",
        },
        {
            "name": "health",
            "description": "Health check and monitoring endpoints.",
        },
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CorsConfig.get_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(grocery_list.router)
app.include_router(meal_plans.router)
app.include_router(recipes.router)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Render HTTP errors as {"detail": ..., "message": ...}.

    The extra message field is what API clients display; detail is kept for
    FastAPI compatibility.
    """
    body: Dict[str, Any] = {"detail": exc.detail}
    if isinstance(exc.detail, str):
        body["message"] = exc.detail
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


@app.get("/health", tags=["health"], summary="Health check")
def health() -> Dict[str, Any]:
    """
    Liveness check.

    Returns:
        {"status": "ok", "uptime_seconds": float, "database": "enabled" | "in-memory"}
    """
    return {
        "status": "ok",
        "uptime_seconds": round(time.time() - _APP_START_TIME, 1),
        "database": "enabled" if db_is_enabled() else "in-memory",
    }

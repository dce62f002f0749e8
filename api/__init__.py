"""
Meal planner HTTP API.

This package contains:
- main: FastAPI application and router wiring
- config: .env loading and configuration classes
- auth: Bearer token dependencies
- schemas: Request body models
- routers: grocery list, meal plan and recipe endpoints
"""

"""Recipe endpoints. Reading a recipe is allowed for guests; saving needs a signed-in user."""

from typing import Any, Dict, List, Optional

from client.api_client import ApiClient, encode_path_segment
from client.errors import validation_error


class RecipeApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def _recipe_path(self, recipe_id: str) -> str:
        if not recipe_id:
            raise validation_error("Recipe id is required", field="id")
        return f"/recipes/{encode_path_segment(recipe_id)}"

    def get(self, recipe_id: str) -> Dict[str, Any]:
        return self.client.get(self._recipe_path(recipe_id), auth="optional")

    def create(
        self,
        title: str,
        ingredients: List[str],
        instructions: Optional[List[str]] = None,
        servings: Optional[int] = None,
        tags: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        if not title or not title.strip():
            raise validation_error("Recipe title is required", field="title")
        if servings is not None and servings < 1:
            raise validation_error("Servings must be at least 1", field="servings")
        body: Dict[str, Any] = {
            "title": title.strip(),
            "ingredients": list(ingredients or []),
            "instructions": list(instructions or []),
            "tags": list(tags or []),
        }
        if servings is not None:
            body["servings"] = servings
        return self.client.post("/recipes", body)

    def list_saved(self) -> List[Dict[str, Any]]:
        return self.client.get("/recipes/saved") or []

    def save(self, recipe_id: str) -> Dict[str, Any]:
        """Save a recipe for the current user. Saving twice is a no-op."""
        return self.client.post(f"{self._recipe_path(recipe_id)}/save")

    def unsave(self, recipe_id: str) -> Dict[str, Any]:
        return self.client.delete(f"{self._recipe_path(recipe_id)}/save")

"""Persist the recipes of the last advise cycle to ``.wasm_advisor/recipes.json``."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from wasm_advisor.constants import RECIPES_FILE
from wasm_advisor.project.exceptions import RecipeStoreError
from wasm_advisor.recipe import Recipe, recipe_array_from_json

if TYPE_CHECKING:
    from wasm_advisor.project.project import Project
    from wasm_advisor.registries import Registries

logger = logging.getLogger(__name__)


class ProjectRecipeStore:
    def __init__(self, project: Project, registries: Registries) -> None:
        self.project = project
        self.registries = registries
        self.path = project.state_dir / RECIPES_FILE

    def save(self, recipes: list[Recipe]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [r.to_json() for r in recipes]
        self.path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        logger.info("Saved %d recipe(s) to %s", len(recipes), self.path)

    def load(self) -> list[Recipe]:
        """Load persisted recipes; a missing file means none.

        Raises:
            RecipeStoreError: If the file is not valid JSON.
            DeserializeError: If a request or action type is not registered.
            UnknownAdvisorError: If an advisor type is not registered.
        """
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise RecipeStoreError(f"Failed to read {self.path}: {exc}") from exc
        if not isinstance(raw, list):
            raise RecipeStoreError(f"{self.path}: expected a list of recipes")
        return recipe_array_from_json(self.project, raw, self.registries)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)

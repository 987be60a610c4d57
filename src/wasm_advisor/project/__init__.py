"""Project state: build config, build log, persisted recipes."""

from wasm_advisor.project.exceptions import ProjectConfigError, ProjectError, RecipeStoreError
from wasm_advisor.project.log import ProjectLog
from wasm_advisor.project.project import Project
from wasm_advisor.project.recipes import ProjectRecipeStore

__all__ = [
    "Project",
    "ProjectConfigError",
    "ProjectError",
    "ProjectLog",
    "ProjectRecipeStore",
    "RecipeStoreError",
]

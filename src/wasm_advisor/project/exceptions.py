"""Exceptions for project state on disk."""


class ProjectError(Exception):
    """Base exception for all project operations."""

    code = "PROJECT_GENERAL"


class ProjectConfigError(ProjectError):
    """Raised when ``config.json`` cannot be read or validated."""

    code = "PROJECT_CONFIG_LOAD_FAIL"


class RecipeStoreError(ProjectError):
    """Raised when ``recipes.json`` cannot be read."""

    code = "PROJECT_RECIPES_LOAD_FAIL"

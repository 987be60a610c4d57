"""Data models for the wasm advisor."""

from wasm_advisor.models.config import (
    ENV_TYPES,
    ArgUpdateType,
    BuildArg,
    BuildStep,
    ProjectConfig,
)

__all__ = [
    "ArgUpdateType",
    "BuildArg",
    "BuildStep",
    "ENV_TYPES",
    "ProjectConfig",
]

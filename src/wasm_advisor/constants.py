"""Shared constants for project layout and advisor dispatch."""

from pathlib import Path

# Per-project state directory (config, log, persisted recipes)
STATE_DIR = ".wasm_advisor"
CONFIG_FILE = "config.json"
LOG_FILE = "log.md"
RECIPES_FILE = "recipes.json"

# Build output and dependency folders, skipped by file searches
BUILD_DIR = "wasm_build"
DEPENDENCY_DIR = "wasm_deps"

PIPELINES_ENV_VAR = "WASM_ADVISOR_PIPELINES"
DEFAULT_PIPELINES_PATH = Path(__file__).parent / "pipelines" / "advisor_pipelines.json"

FALLBACK_ADVISOR_TYPE = "ErrorsNotHandledAdvisor"

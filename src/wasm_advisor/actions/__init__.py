"""Actions: the reversible-in-intent mutations carried by recipes."""

from wasm_advisor.actions import (
    args_change,
    build_step_change,
    config_env_change,
    config_option_change,
    file_change,
    show_suggestion,
)
from wasm_advisor.actions.args_change import BuilderArgsChangeAction, update_args
from wasm_advisor.actions.base import Action
from wasm_advisor.actions.build_step_change import BuildStepChangeAction, BuildStepChangeManager
from wasm_advisor.actions.config_env_change import ConfigEnvChangeAction
from wasm_advisor.actions.config_option_change import ConfigOptionChangeAction
from wasm_advisor.actions.exceptions import (
    ActionError,
    BuildStepIntersectionError,
    FileIntersectionError,
    RegionIntersectionError,
)
from wasm_advisor.actions.file_change import FileChangeAction, FileChangeManager
from wasm_advisor.actions.regions import BuildStepRegion, FileLocation, FileRegion
from wasm_advisor.actions.show_suggestion import (
    ShowDepRecipeAction,
    ShowSuggestionAction,
    SuggestionExample,
)
from wasm_advisor.factory.json_factory import JsonFactories


def register_all(factories: JsonFactories) -> None:
    """Register every built-in action deserializer."""
    for module in (
        file_change,
        build_step_change,
        args_change,
        config_env_change,
        config_option_change,
        show_suggestion,
    ):
        module.register(factories)


__all__ = [
    "Action",
    "ActionError",
    "BuildStepChangeAction",
    "BuildStepChangeManager",
    "BuildStepIntersectionError",
    "BuildStepRegion",
    "BuilderArgsChangeAction",
    "ConfigEnvChangeAction",
    "ConfigOptionChangeAction",
    "FileChangeAction",
    "FileChangeManager",
    "FileIntersectionError",
    "FileLocation",
    "FileRegion",
    "RegionIntersectionError",
    "ShowDepRecipeAction",
    "ShowSuggestionAction",
    "SuggestionExample",
    "register_all",
    "update_args",
]

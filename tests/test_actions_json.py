"""JSON serialization of every built-in action through the action registry."""

import pytest

from wasm_advisor.actions import (
    BuilderArgsChangeAction,
    BuildStepChangeAction,
    BuildStepRegion,
    ConfigEnvChangeAction,
    ConfigOptionChangeAction,
    FileChangeAction,
    FileRegion,
    ShowDepRecipeAction,
    ShowSuggestionAction,
    SuggestionExample,
)
from wasm_advisor.models.config import BuildArg


def _actions(project):
    return [
        FileChangeAction(
            project.file_change_manager,
            "fix",
            FileRegion(file="/p/a.c", line_start=1, line_end=3),
            "int x;",
        ),
        FileChangeAction(
            project.file_change_manager,
            "drop",
            FileRegion(file="/p/a.c", line_start=5, line_end=6),
            None,
        ),
        BuildStepChangeAction(
            project,
            "steps",
            BuildStepRegion(i_start=0),
            [{"id": 9, "command": "emmake make"}],
        ),
        BuilderArgsChangeAction(project, "args", [BuildArg(option="--disable-asm")], 1),
        ConfigEnvChangeAction(project, "env", {"cflags": [BuildArg(option="-msimd128")]}),
        ConfigOptionChangeAction(project, "opt", {"needSimd": True}),
        ShowSuggestionAction(
            "error",
            "suggest",
            SuggestionExample(before="-mfpmath=sse", after=""),
            FileRegion(file="/p/a.c", line_start=2, line_end=3),
        ),
        ShowSuggestionAction("option", "plain"),
        ShowDepRecipeAction("deps", ["libz", "libpng"]),
    ]


class TestActionJson:
    def test_every_action_type_is_registered(self, registries, project):
        for action in _actions(project):
            assert registries.actions.has(action.type), action.type

    @pytest.mark.parametrize("index", range(9))
    def test_to_json_is_stable_through_from_json(self, registries, project, index):
        action = _actions(project)[index]
        data = action.to_json()

        restored = registries.actions.from_json(project, data)

        assert type(restored) is type(action)
        assert restored.to_json() == data

    def test_file_change_binds_project_manager(self, registries, project):
        data = _actions(project)[0].to_json()
        restored = registries.actions.from_json(project, data)
        assert restored.manager is project.file_change_manager


class TestShowActions:
    def test_show_suggestion_always_succeeds(self):
        assert ShowSuggestionAction("error", "look here").apply() is True

    def test_show_dep_recipe_always_succeeds(self):
        assert ShowDepRecipeAction("deps", ["libz"]).apply() is True

"""Strip x86-only ``-mfpmath=`` flags that clang rejects for wasm targets."""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING, Sequence

from wasm_advisor.actions.file_change import FileChangeAction
from wasm_advisor.actions.regions import FileRegion
from wasm_advisor.actions.show_suggestion import ShowSuggestionAction, SuggestionExample
from wasm_advisor.advisors.base import NOT_HANDLED, AdviseResult
from wasm_advisor.constants import BUILD_DIR, DEPENDENCY_DIR
from wasm_advisor.recipe import Recipe
from wasm_advisor.requests.common import ErrorAdviseRequest
from wasm_advisor.utils.search import find_pattern_in_files

if TYPE_CHECKING:
    from wasm_advisor.actions.base import Action
    from wasm_advisor.advisors.registry import AdvisorRegistry
    from wasm_advisor.project.project import Project
    from wasm_advisor.requests.base import AdviseRequest

# Only top-level build files are edited automatically
BUILD_FILES = ("configure", "CMakeLists.txt", "Makefile")
FPMATH_FLAG_RE = re.compile(r"-mfpmath=\S*")


class FpmathAdvisor:
    TYPE = "FpmathAdvisor"
    type = TYPE
    desc = "Advise issues related to fpmath"

    def _actions(self, project: Project) -> list[Action]:
        excluded = [BUILD_DIR, DEPENDENCY_DIR]
        actions: list[Action] = []
        for m in find_pattern_in_files("mfpmath=", project.root, excluded):
            if m.file not in BUILD_FILES:
                continue
            actions.append(FileChangeAction(
                project.file_change_manager,
                f"Remove argument `-mfpmath` from `{m.file}` at line **{m.line}**",
                FileRegion(
                    file=os.path.join(project.root, m.file),
                    line_start=m.line,
                    line_end=m.line + 1,
                ),
                FPMATH_FLAG_RE.sub("", m.content),
            ))
        if not actions:
            # Nothing editable found, so point at the flags instead
            actions.append(ShowSuggestionAction(
                "error",
                "Please remove all related '-mfpmath' compiler flags in your project.",
                SuggestionExample(before="-mfpmath=sse -msse -msse2", after="-msse -msse2"),
                None,
            ))
        return actions

    def advise(
        self,
        project: Project,
        request: AdviseRequest,
        request_list: Sequence[AdviseRequest],
    ) -> AdviseResult:
        if not isinstance(request, ErrorAdviseRequest):
            return NOT_HANDLED
        if "unknown FP unit" not in request.error and not find_pattern_in_files(
            "unknown FP unit", project.root, [BUILD_DIR, DEPENDENCY_DIR]
        ):
            return NOT_HANDLED
        return AdviseResult(
            handled=True,
            recipe=Recipe(project, "Recipe for fpmath issue", self, request, self._actions(project)),
        )


def register(registry: AdvisorRegistry) -> None:
    registry.register(FpmathAdvisor.TYPE, FpmathAdvisor)

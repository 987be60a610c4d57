from __future__ import annotations

import re
from typing import TYPE_CHECKING, Sequence

from wasm_advisor.actions.show_suggestion import ShowSuggestionAction
from wasm_advisor.advisors.base import NOT_HANDLED, AdviseResult
from wasm_advisor.recipe import Recipe
from wasm_advisor.requests.common import ErrorAdviseRequest

if TYPE_CHECKING:
    from wasm_advisor.advisors.registry import AdvisorRegistry
    from wasm_advisor.project.project import Project
    from wasm_advisor.requests.base import AdviseRequest

HEADER_MISSING_RE = re.compile(r"fatal error: '.*\.h' file not found")


class HeaderMissingAdvisor:
    TYPE = "HeaderMissingAdvisor"
    type = TYPE
    desc = "Advise issues related to missing header files."

    def _recipe(self, project: Project, request: ErrorAdviseRequest, line: str) -> Recipe:
        search_str = line[line.index("fatal error"):]
        suggestion = (
            "A header file is missing. There might be several reasons:\n\n"
            f"- The related library is `not` installed. Search for `{search_str}` to find out "
            "which library is missing. The library has to be built with emscripten; if no "
            "emscripten-built binary is available, build it from source first.\n"
            "- If the library is installed, its header directory may be missing from the "
            "compiler flags; add `-I${HEADER_PATH}` to the compiler/linker flags."
        )
        action = ShowSuggestionAction(
            "error", f"**Error log**\n\n```{line}```\n\n{suggestion}", None, None
        )
        return Recipe(project, "Recipe for issue of missing header file", self, request, action)

    def advise(
        self,
        project: Project,
        request: AdviseRequest,
        request_list: Sequence[AdviseRequest],
    ) -> AdviseResult:
        if isinstance(request, ErrorAdviseRequest):
            for line in request.error.split("\n"):
                if HEADER_MISSING_RE.search(line):
                    return AdviseResult(handled=True, recipe=self._recipe(project, request, line))
        return NOT_HANDLED


def register(registry: AdvisorRegistry) -> None:
    registry.register(HeaderMissingAdvisor.TYPE, HeaderMissingAdvisor)

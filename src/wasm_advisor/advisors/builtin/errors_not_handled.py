"""Fallback advisor: show the raw error when nothing else explains it."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from wasm_advisor.actions.show_suggestion import ShowSuggestionAction
from wasm_advisor.advisors.base import NOT_HANDLED, AdviseResult
from wasm_advisor.recipe import Recipe
from wasm_advisor.requests.common import ErrorAdviseRequest

if TYPE_CHECKING:
    from wasm_advisor.advisors.registry import AdvisorRegistry
    from wasm_advisor.project.project import Project
    from wasm_advisor.requests.base import AdviseRequest


class ErrorsNotHandledAdvisor:
    TYPE = "ErrorsNotHandledAdvisor"
    type = TYPE
    desc = "Default advisor for errors not handled by any other advisor"

    def advise(
        self,
        project: Project,
        request: AdviseRequest,
        request_list: Sequence[AdviseRequest],
    ) -> AdviseResult:
        if not isinstance(request, ErrorAdviseRequest):
            return NOT_HANDLED
        action = ShowSuggestionAction(
            "error",
            "This error is `not` handled by the advisor, please try to resolve it manually:"
            f"\n\n```\n{request.error}\n```",
            None,
            request.location.to_file_region() if request.location else None,
        )
        return AdviseResult(
            handled=True,
            recipe=Recipe(project, "Recipe for errors not handled", self, request, action),
        )


def register(registry: AdvisorRegistry) -> None:
    registry.register(ErrorsNotHandledAdvisor.TYPE, ErrorsNotHandledAdvisor)

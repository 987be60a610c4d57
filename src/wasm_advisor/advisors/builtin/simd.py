from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from wasm_advisor.actions.config_option_change import ConfigOptionChangeAction
from wasm_advisor.advisors.base import NOT_HANDLED, AdviseResult
from wasm_advisor.constants import BUILD_DIR, DEPENDENCY_DIR
from wasm_advisor.recipe import Recipe
from wasm_advisor.requests.common import ErrorAdviseRequest
from wasm_advisor.utils.search import find_pattern_in_files

if TYPE_CHECKING:
    from wasm_advisor.advisors.registry import AdvisorRegistry
    from wasm_advisor.project.project import Project
    from wasm_advisor.requests.base import AdviseRequest

SIMD128_ERROR = (
    "emcc: error: Passing any of -msse, -msse2, -msse3, -mssse3, -msse4.1, -msse4.2, "
    "-msse4, -mavx, -mfpu=neon flags also requires passing -msimd128!"
)


class SimdAdvisor:
    TYPE = "SimdAdvisor"
    type = TYPE
    desc = "Advise issues related to SIMD"

    def advise(
        self,
        project: Project,
        request: AdviseRequest,
        request_list: Sequence[AdviseRequest],
    ) -> AdviseResult:
        if not isinstance(request, ErrorAdviseRequest):
            return NOT_HANDLED
        if SIMD128_ERROR not in request.error and not find_pattern_in_files(
            SIMD128_ERROR, project.root, [BUILD_DIR, DEPENDENCY_DIR]
        ):
            return NOT_HANDLED
        action = ConfigOptionChangeAction(
            project,
            "If you want to port `SIMD` code targeting WebAssembly, "
            "we should enable the `SIMD support` option.",
            {"needSimd": True},
        )
        return AdviseResult(
            handled=True,
            recipe=Recipe(project, "Recipe for SIMD issue", self, request, action),
        )


def register(registry: AdvisorRegistry) -> None:
    registry.register(SimdAdvisor.TYPE, SimdAdvisor)

"""Advisors for architecture-specific assembly that emscripten cannot compile."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from wasm_advisor.actions.show_suggestion import ShowSuggestionAction, SuggestionExample
from wasm_advisor.advisors.base import NOT_HANDLED, AdviseResult
from wasm_advisor.constants import BUILD_DIR, DEPENDENCY_DIR
from wasm_advisor.recipe import Recipe
from wasm_advisor.requests.common import ErrorAdviseRequest
from wasm_advisor.utils.search import find_pattern_in_files

if TYPE_CHECKING:
    from wasm_advisor.advisors.registry import AdvisorRegistry
    from wasm_advisor.project.project import Project
    from wasm_advisor.requests.base import AdviseRequest

CONFIGURE_BEFORE = "./configure\n --target-os=none\n --arch=x86_32"


class InlineAsmAdvisor:
    TYPE = "InlineAsmAdvisor"
    type = TYPE
    desc = "Advise issues related to inline asm"

    def advise(
        self,
        project: Project,
        request: AdviseRequest,
        request_list: Sequence[AdviseRequest],
    ) -> AdviseResult:
        if not isinstance(request, ErrorAdviseRequest) or "in asm" not in request.error:
            return NOT_HANDLED
        action = ShowSuggestionAction(
            "error",
            "Code with architecture-specific inline assembly (like an `asm()` containing x86 "
            "code) is not portable and has to be replaced with portable C or C++.\n"
            "Codebases often keep inline assembly as an optional optimization, so look for an "
            "option to disable it (i.e., `--disable-inline-asm`).",
            SuggestionExample(before=CONFIGURE_BEFORE, after=f"{CONFIGURE_BEFORE}\n --disable-inline-asm"),
            None,
        )
        return AdviseResult(
            handled=True,
            recipe=Recipe(project, "Recipe for inline assembly issue", self, request, action),
        )


class X86AsmAdvisor:
    TYPE = "X86AsmAdvisor"
    type = TYPE
    desc = "Advise issues related to x86asm"

    def _needs_assembler(self, project: Project, request: ErrorAdviseRequest) -> bool:
        if "nasm/yasm not found or too old." in request.error:
            return True
        return bool(find_pattern_in_files(
            "nasm: command not found", project.root, [BUILD_DIR, DEPENDENCY_DIR]
        ))

    def advise(
        self,
        project: Project,
        request: AdviseRequest,
        request_list: Sequence[AdviseRequest],
    ) -> AdviseResult:
        if not isinstance(request, ErrorAdviseRequest) or not self._needs_assembler(project, request):
            return NOT_HANDLED
        action = ShowSuggestionAction(
            "error",
            "Emscripten does `not` support `x86 SIMD assembly`; such code has to use SIMD "
            "intrinsics or compiler vector extensions, or be replaced with portable C or C++.\n"
            "Look for an option that disables the architecture-specific assembly "
            "(i.e., `--disable-x86asm`, `--disable-asm`).",
            SuggestionExample(before=CONFIGURE_BEFORE, after=f"{CONFIGURE_BEFORE}\n --disable-x86asm"),
            None,
        )
        return AdviseResult(
            handled=True,
            recipe=Recipe(project, "Recipe for asm issue", self, request, action),
        )


def register(registry: AdvisorRegistry) -> None:
    registry.register(InlineAsmAdvisor.TYPE, InlineAsmAdvisor)
    registry.register(X86AsmAdvisor.TYPE, X86AsmAdvisor)

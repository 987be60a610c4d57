"""Advisors shipped with wasm-advisor, registered through ``register_all``."""

from wasm_advisor.advisors.builtin import (
    asm,
    errors_not_handled,
    fpmath,
    header_missing,
    simd,
    template_literal_validate,
)
from wasm_advisor.advisors.builtin.asm import InlineAsmAdvisor, X86AsmAdvisor
from wasm_advisor.advisors.builtin.errors_not_handled import ErrorsNotHandledAdvisor
from wasm_advisor.advisors.builtin.fpmath import FpmathAdvisor
from wasm_advisor.advisors.builtin.header_missing import HeaderMissingAdvisor
from wasm_advisor.advisors.builtin.simd import SimdAdvisor
from wasm_advisor.advisors.builtin.template_literal_validate import TemplateLiteralValidateAdvisor
from wasm_advisor.advisors.registry import AdvisorRegistry

_MODULES = (
    errors_not_handled,
    header_missing,
    asm,
    simd,
    fpmath,
    template_literal_validate,
)


def register_all(registry: AdvisorRegistry) -> None:
    for module in _MODULES:
        module.register(registry)


__all__ = [
    "ErrorsNotHandledAdvisor",
    "FpmathAdvisor",
    "HeaderMissingAdvisor",
    "InlineAsmAdvisor",
    "SimdAdvisor",
    "TemplateLiteralValidateAdvisor",
    "X86AsmAdvisor",
    "register_all",
]

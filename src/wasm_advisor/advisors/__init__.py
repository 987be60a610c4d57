"""Advisors, their registry and pipelines, and the advise loop.

Built-in advisors live in ``wasm_advisor.advisors.builtin`` and are only
imported by whoever registers them.
"""

from wasm_advisor.advisors.base import NOT_HANDLED, AdviseResult, Advisor, AdvisorFactory
from wasm_advisor.advisors.exceptions import (
    AdvisorError,
    DuplicateAdvisorError,
    PipelineConfigError,
    PipelineConfigMissingError,
    UnknownAdvisorError,
)
from wasm_advisor.advisors.manager import AdviseManager
from wasm_advisor.advisors.pipeline import (
    AdvisorPipeline,
    AdvisorPipelineConfig,
    AdvisorPipelineFactory,
)
from wasm_advisor.advisors.registry import AdvisorRegistry

__all__ = [
    "AdviseManager",
    "AdviseResult",
    "Advisor",
    "AdvisorError",
    "AdvisorFactory",
    "AdvisorPipeline",
    "AdvisorPipelineConfig",
    "AdvisorPipelineFactory",
    "AdvisorRegistry",
    "DuplicateAdvisorError",
    "NOT_HANDLED",
    "PipelineConfigError",
    "PipelineConfigMissingError",
    "UnknownAdvisorError",
]

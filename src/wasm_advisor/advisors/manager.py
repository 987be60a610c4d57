"""The advise loop: drain queued requests through their advisor pipelines."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wasm_advisor.advisors.pipeline import AdvisorPipelineFactory
from wasm_advisor.advisors.registry import AdvisorRegistry
from wasm_advisor.constants import FALLBACK_ADVISOR_TYPE
from wasm_advisor.requests.common import ErrorAdviseRequest

if TYPE_CHECKING:
    from wasm_advisor.project.project import Project
    from wasm_advisor.recipe import Recipe
    from wasm_advisor.requests.base import AdviseRequest

logger = logging.getLogger(__name__)


class AdviseManager:
    """Dispatches queued advise requests to advisors and collects their recipes.

    For each request, pipelines are resolved from its tags and walked in
    configured order. The first advisor that handles the request without
    asking for propagation ends that request's dispatch. An advisor may
    replace the remaining queue through ``new_request_queue``; the last
    replacement wins. An error request that yields no recipe gets one from
    the fallback advisor.

    Exceptions raised by advisors are not caught and abort ``advise``.
    """

    def __init__(
        self,
        project: Project,
        pipeline_factory: AdvisorPipelineFactory,
        registry: AdvisorRegistry,
        fallback_type: str = FALLBACK_ADVISOR_TYPE,
    ) -> None:
        self.project = project
        self.pipeline_factory = pipeline_factory
        self.registry = registry
        self.fallback_type = fallback_type
        self._request_list: list[AdviseRequest] = []

    def queue_request(self, request: AdviseRequest) -> None:
        self._request_list.append(request)

    @property
    def pending(self) -> list[AdviseRequest]:
        return list(self._request_list)

    def advise(self) -> list[Recipe]:
        requests = self._request_list
        self._request_list = []
        recipes: list[Recipe] = []

        while requests:
            request = requests.pop(0)
            logger.info("advising request with tags: %s", request.tags)
            produced = 0

            matched = False
            for pipeline in self.pipeline_factory.create_pipelines(request.tags):
                for advisor in pipeline.advisors:
                    result = advisor.advise(self.project, request, tuple(requests))
                    if not result.handled:
                        continue
                    logger.info("  - advised by %s", advisor.type)
                    if result.recipe is not None:
                        recipes.append(result.recipe)
                        produced += 1
                    if result.new_request_queue is not None:
                        requests = list(result.new_request_queue)
                    if not result.need_propagation:
                        matched = True
                        break
                if matched:
                    break

            if isinstance(request, ErrorAdviseRequest) and not produced:
                recipe = self._fallback_recipe(request, requests)
                if recipe is not None:
                    recipes.append(recipe)

        return recipes

    def _fallback_recipe(
        self, request: ErrorAdviseRequest, requests: list[AdviseRequest]
    ) -> Recipe | None:
        if not self.registry.has(self.fallback_type):
            logger.warning("No fallback advisor %s registered", self.fallback_type)
            return None
        advisor = self.registry.create(self.fallback_type)
        result = advisor.advise(self.project, request, tuple(requests))
        if not result.handled:
            return None
        logger.info("  - errors not handled by any advisor, running %s", advisor.type)
        return result.recipe

from __future__ import annotations

import logging

from wasm_advisor.advisors.base import Advisor, AdvisorFactory
from wasm_advisor.advisors.exceptions import DuplicateAdvisorError, UnknownAdvisorError

logger = logging.getLogger(__name__)


class AdvisorRegistry:
    """Advisor factories keyed by advisor type.

    Built once at start-up and handed to whatever needs to create advisors
    (pipeline factory, advise manager, recipe deserializer).
    """

    def __init__(self) -> None:
        self._factories: dict[str, AdvisorFactory] = {}

    def register(self, advisor_type: str, factory: AdvisorFactory) -> None:
        if advisor_type in self._factories:
            raise DuplicateAdvisorError(
                f"Already registered AdvisorFactory with type: {advisor_type}"
            )
        self._factories[advisor_type] = factory
        logger.info("<< AdvisorFactory >> registered %s", advisor_type)

    def has(self, advisor_type: str) -> bool:
        return advisor_type in self._factories

    def factory_for(self, advisor_type: str) -> AdvisorFactory | None:
        return self._factories.get(advisor_type)

    def types(self) -> list[str]:
        return list(self._factories)

    def create(self, advisor_type: str, args: str | None = None) -> Advisor:
        factory = self._factories.get(advisor_type)
        if factory is None:
            raise UnknownAdvisorError(f"Unknown advisor type {advisor_type}")
        return factory(args) if args else factory()

"""Toggle boolean build options (e.g. ``needSimd``) in the project build config."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from wasm_advisor.factory.json_factory import TYPE_KEY, JsonFactories, check_json_type

if TYPE_CHECKING:
    from wasm_advisor.project.project import Project

logger = logging.getLogger(__name__)


class ConfigOptionChangeAction:
    TYPE = "ConfigOptionChange"
    properties = "options"

    def __init__(self, project: Project, desc: str, part_to_update: dict[str, bool]) -> None:
        self.project = project
        self.desc = desc
        self.part_to_update = dict(part_to_update)

    @property
    def type(self) -> str:
        return self.TYPE

    def apply(self) -> bool:
        logger.info("Updating options with %s", self.part_to_update)
        options = {**self.project.config.options, **self.part_to_update}
        self.project.update_build_config(options=options)
        return True

    def to_json(self) -> dict[str, Any]:
        return {
            TYPE_KEY: self.TYPE,
            "desc": self.desc,
            "properties": self.properties,
            "partToUpdate": dict(self.part_to_update),
        }

    @classmethod
    def from_json(cls, project: Project, o: dict[str, Any]) -> ConfigOptionChangeAction:
        check_json_type(cls.TYPE, o)
        return cls(project, o.get("desc", ""), o.get("partToUpdate", {}))


def register(factories: JsonFactories) -> None:
    factories.register(ConfigOptionChangeAction.TYPE, ConfigOptionChangeAction.from_json)

"""Change compiler/linker flags (``envs``) in the project build config."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from wasm_advisor.actions.args_change import as_build_args, update_args
from wasm_advisor.factory.json_factory import TYPE_KEY, JsonFactories, check_json_type
from wasm_advisor.models.config import BuildArg

if TYPE_CHECKING:
    from wasm_advisor.project.project import Project

logger = logging.getLogger(__name__)


class ConfigEnvChangeAction:
    TYPE = "ConfigEnvChange"
    properties = "envs"

    def __init__(
        self, project: Project, desc: str, part_to_update: dict[str, list[BuildArg]]
    ) -> None:
        self.project = project
        self.desc = desc
        self.part_to_update = {env: as_build_args(args) for env, args in part_to_update.items()}

    @property
    def type(self) -> str:
        return self.TYPE

    def apply(self) -> bool:
        envs = dict(self.project.config.envs)
        for env, args in self.part_to_update.items():
            logger.info("Updating %s with %s", env, [a.model_dump() for a in args])
            envs[env] = update_args(envs.get(env, ""), args)
        self.project.update_build_config(envs=envs)
        return True

    def to_json(self) -> dict[str, Any]:
        return {
            TYPE_KEY: self.TYPE,
            "desc": self.desc,
            "properties": self.properties,
            "partToUpdate": {
                env: [a.model_dump(mode="json") for a in args]
                for env, args in self.part_to_update.items()
            },
        }

    @classmethod
    def from_json(cls, project: Project, o: dict[str, Any]) -> ConfigEnvChangeAction:
        check_json_type(cls.TYPE, o)
        return cls(project, o.get("desc", ""), o.get("partToUpdate", {}))


def register(factories: JsonFactories) -> None:
    factories.register(ConfigEnvChangeAction.TYPE, ConfigEnvChangeAction.from_json)

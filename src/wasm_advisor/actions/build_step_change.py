"""Insert, replace or remove build steps in the project's build config."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from wasm_advisor.actions.regions import BuildStepRegion
from wasm_advisor.factory.json_factory import TYPE_KEY, JsonFactories, check_json_type
from wasm_advisor.models.config import BuildStep

if TYPE_CHECKING:
    from wasm_advisor.project.project import Project

logger = logging.getLogger(__name__)


class BuildStepChangeManager:
    """Serializes build step edits within one session, like FileChangeManager does for files."""

    def __init__(self) -> None:
        self._changes: list[BuildStepChangeAction] = []

    def history(self) -> list[BuildStepChangeAction]:
        return list(self._changes)

    def apply(self, action: BuildStepChangeAction) -> bool:
        actual_region = action.actual_build_step_region(self._changes)
        if actual_region is None:
            logger.error("Build step change conflicts for action: %s (%s)", action.desc, action.region)
            return False
        if not self._update_steps(action.project, actual_region, action.new_build_steps):
            return False
        self._changes.append(action)
        return True

    @staticmethod
    def _update_steps(
        project: Project, region: BuildStepRegion, steps: list[dict[str, Any]]
    ) -> bool:
        builders = list(project.config.builders)
        if not builders:
            logger.warning("No build steps configured for %s", project.root)
            return False
        builders[region.i_start:region.i_end] = [BuildStep.model_validate(s) for s in steps]
        project.update_build_config(builders=builders)
        return True


class BuildStepChangeAction:
    """Replace build steps ``region`` of the builder list with ``new_build_steps``."""

    TYPE = "BuildStepChange"

    def __init__(
        self,
        project: Project,
        desc: str,
        region: BuildStepRegion,
        new_build_steps: list[dict[str, Any]] | None,
    ) -> None:
        self.project = project
        self.desc = desc
        self.region = region
        self.new_build_steps = list(new_build_steps or [])
        self.n_new_steps = len(self.new_build_steps)

    @property
    def type(self) -> str:
        return self.TYPE

    def apply(self) -> bool:
        return self.project.build_step_change_manager.apply(self)

    def actual_build_step_region(
        self, changes: list[BuildStepChangeAction]
    ) -> BuildStepRegion | None:
        delta = 0
        for change in changes:
            shift = self.region.shift_for(change.region, change.n_new_steps)
            if shift is None:
                logger.error("Build steps change conflicts: %s with %s", self.region, change.region)
                return None
            delta += shift
        return self.region.shifted(delta)

    def to_json(self) -> dict[str, Any]:
        return {
            TYPE_KEY: self.TYPE,
            "desc": self.desc,
            "region": self.region.to_json(),
            "newBuildSteps": self.new_build_steps,
        }

    @classmethod
    def from_json(cls, project: Project, o: dict[str, Any]) -> BuildStepChangeAction:
        check_json_type(cls.TYPE, o)
        return cls(
            project,
            o.get("desc", ""),
            BuildStepRegion.from_json(o["region"]),
            o.get("newBuildSteps"),
        )


def register(factories: JsonFactories) -> None:
    factories.register(BuildStepChangeAction.TYPE, BuildStepChangeAction.from_json)

"""Display-only actions: they report a suggestion and change nothing."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, ConfigDict

from wasm_advisor.actions.regions import FileRegion
from wasm_advisor.factory.json_factory import TYPE_KEY, JsonFactories, check_json_type

if TYPE_CHECKING:
    from wasm_advisor.project.project import Project

logger = logging.getLogger(__name__)

# "option": generated from user options, "error": generated from an error request
SuggestionInitiator = Literal["option", "error"]


class SuggestionExample(BaseModel):
    """A before/after snippet shown alongside a suggestion."""

    model_config = ConfigDict(frozen=True)

    before: str
    after: str

    def to_json(self) -> dict[str, Any]:
        return {TYPE_KEY: "SuggestionExample", **self.model_dump()}

    @classmethod
    def from_json(cls, o: dict[str, Any]) -> "SuggestionExample":
        check_json_type("SuggestionExample", o)
        return cls.model_validate(o)


class ShowSuggestionAction:
    TYPE = "ShowSuggestion"

    def __init__(
        self,
        initiator: SuggestionInitiator,
        desc: str,
        suggestion: SuggestionExample | None = None,
        region: FileRegion | None = None,
    ) -> None:
        self.initiator = initiator
        self.desc = desc
        self.suggestion = suggestion
        self.region = region

    @property
    def type(self) -> str:
        return self.TYPE

    def apply(self) -> bool:
        where = f"{self.region.file}:{self.region.line_start}" if self.region else "General:"
        logger.info("%s %s", where, self.desc)
        if self.suggestion:
            logger.info(
                "Example\nBefore:\n%s\nAfter:\n%s", self.suggestion.before, self.suggestion.after
            )
        return True

    def to_json(self) -> dict[str, Any]:
        return {
            TYPE_KEY: self.TYPE,
            "initiator": self.initiator,
            "desc": self.desc,
            "suggestion": self.suggestion.to_json() if self.suggestion else None,
            "region": self.region.to_json() if self.region else None,
        }

    @classmethod
    def from_json(cls, project: Project, o: dict[str, Any]) -> ShowSuggestionAction:
        check_json_type(cls.TYPE, o)
        return cls(
            o.get("initiator", "error"),
            o.get("desc", ""),
            SuggestionExample.from_json(o["suggestion"]) if o.get("suggestion") else None,
            FileRegion.from_json(o["region"]) if o.get("region") else None,
        )


class ShowDepRecipeAction:
    """List dependent projects that have recipes of their own."""

    TYPE = "ShowDepRecipe"

    def __init__(self, desc: str, deps: list[str]) -> None:
        self.desc = desc
        self.deps = list(deps)

    @property
    def type(self) -> str:
        return self.TYPE

    def apply(self) -> bool:
        logger.info("Dependent projects that have recipes generated:\n%s", "\n".join(self.deps))
        return True

    def to_json(self) -> dict[str, Any]:
        return {TYPE_KEY: self.TYPE, "desc": self.desc, "deps": list(self.deps)}

    @classmethod
    def from_json(cls, project: Project, o: dict[str, Any]) -> ShowDepRecipeAction:
        check_json_type(cls.TYPE, o)
        return cls(o.get("desc", ""), o.get("deps", []))


def register(factories: JsonFactories) -> None:
    factories.register(ShowSuggestionAction.TYPE, ShowSuggestionAction.from_json)
    factories.register(ShowDepRecipeAction.TYPE, ShowDepRecipeAction.from_json)

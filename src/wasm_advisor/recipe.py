"""Recipes: an advisor's diagnosis bundled with the actions that fix it."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Sequence

from wasm_advisor.advisors.exceptions import UnknownAdvisorError
from wasm_advisor.factory.json_factory import TYPE_KEY, check_json_type

if TYPE_CHECKING:
    from wasm_advisor.actions.base import Action
    from wasm_advisor.advisors.base import Advisor
    from wasm_advisor.project.project import Project
    from wasm_advisor.registries import Registries
    from wasm_advisor.requests.base import AdviseRequest

logger = logging.getLogger(__name__)


class Recipe:
    """Output of a successful advisor match.

    Args:
        project: Project the recipe applies to.
        desc: Human-readable summary.
        advisor: Advisor that produced it.
        requests: Request(s) that triggered it.
        actions: Action(s) to apply, in order.
        show_no_advisor: Hide the advisor name when displayed.
    """

    TYPE = "Recipe"

    def __init__(
        self,
        project: Project,
        desc: str,
        advisor: Advisor,
        requests: AdviseRequest | Sequence[AdviseRequest],
        actions: Action | Sequence[Action],
        show_no_advisor: bool = False,
    ) -> None:
        self.project = project
        self.desc = desc
        self.advisor = advisor
        self.requests = list(requests) if isinstance(requests, (list, tuple)) else [requests]
        self.actions = list(actions) if isinstance(actions, (list, tuple)) else [actions]
        self.show_no_advisor = show_no_advisor

    def apply(self) -> bool:
        """Apply every action in order.

        A failing action does not stop the ones after it.

        Returns:
            True only if every action applied.
        """
        logger.info("Applying recipe '%s' (%d actions)", self.desc, len(self.actions))
        ok = True
        for action in self.actions:
            if not action.apply():
                logger.warning("Action '%s' of recipe '%s' was not applied", action.desc, self.desc)
                ok = False
        return ok

    def to_json(self) -> dict[str, Any]:
        return {
            TYPE_KEY: self.TYPE,
            "proj": self.project.root,
            "desc": self.desc,
            "advisor": self.advisor.type,
            "requests": [r.to_json() for r in self.requests],
            "actions": [a.to_json() for a in self.actions],
            "showNoAdvisor": self.show_no_advisor,
        }


def recipe_from_json(project: Project, o: dict[str, Any], registries: Registries) -> Recipe:
    """Rebuild a recipe persisted by ``Recipe.to_json``.

    Raises:
        JsonTypeMismatchError: If ``o`` is not a Recipe.
        UnknownAdvisorError: If the advisor type is not registered.
        DeserializeError: If a request or action type is not registered.
    """
    check_json_type(Recipe.TYPE, o)
    advisor_type = o.get("advisor", "")
    if not registries.advisors.has(advisor_type):
        raise UnknownAdvisorError(f"Unknown advisor type {advisor_type} is used.")
    return Recipe(
        project,
        o.get("desc", ""),
        registries.advisors.create(advisor_type),
        registries.requests.from_json_array(project, o.get("requests", [])),
        registries.actions.from_json_array(project, o.get("actions", [])),
        bool(o.get("showNoAdvisor", False)),
    )


def recipe_array_from_json(
    project: Project, arr: list[dict[str, Any]], registries: Registries
) -> list[Recipe]:
    return [recipe_from_json(project, o, registries) for o in arr]

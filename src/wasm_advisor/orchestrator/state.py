"""State definition for the build session graph."""

import operator
from typing import Annotated, Any, Literal, TypedDict

SessionPhase = Literal["prebuild", "build"]


class SessionState(TypedDict):
    """State for one advise-build session.

    Fields with Annotated[list, operator.add] reducers accumulate across nodes.
    ``recipes`` holds the output of the latest advise cycle only.
    """

    project_root: str
    auto_apply: bool
    phase: SessionPhase

    # Build
    failed_step: int | None

    # Advise
    recipes: list[Any]

    # Apply (accumulating reducers)
    applied: Annotated[list[str], operator.add]

    # Error accumulation
    errors: Annotated[list[str], operator.add]


def make_initial_state(project_root: str, auto_apply: bool = False) -> SessionState:
    """Create the initial state for a build session.

    Args:
        project_root: Absolute path to the project root.
        auto_apply: Apply the recipes of the final advise cycle.

    Returns:
        SessionState dict with all fields initialised to defaults.
    """
    return {
        "project_root": project_root,
        "auto_apply": auto_apply,
        "phase": "prebuild",
        "failed_step": None,
        "recipes": [],
        "applied": [],
        "errors": [],
    }

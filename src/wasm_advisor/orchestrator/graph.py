"""LangGraph build session graph: pre-build checks, build steps, advise, apply.

Edge topology::

    START -> prebuild_node -> advise_node
    advise_node -> conditional(decide_fn) -> {build_node, apply_node, END}
    build_node -> advise_node
    apply_node -> END

Pre-build recipes stop the session before any build step runs. Otherwise the
build steps run in order until the first failure, whose output is advised.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from langgraph.graph import END, START, StateGraph

from wasm_advisor.orchestrator.exceptions import BuildStepError, GraphBuildError
from wasm_advisor.orchestrator.runner import StepRunner
from wasm_advisor.orchestrator.state import SessionState
from wasm_advisor.requests.common import ErrorAdviseRequest, PlainAdviseRequest

if TYPE_CHECKING:
    from wasm_advisor.advisors.manager import AdviseManager
    from wasm_advisor.project.recipes import ProjectRecipeStore

logger = logging.getLogger(__name__)

PREBUILD_TAG = "pre-build"


def make_prebuild_node(manager: AdviseManager) -> Callable[[SessionState], dict]:
    """Factory: returns a node closure that opens the session.

    The closure starts a new change-tracking session on the project and
    queues the pre-build request.
    """

    def prebuild_node(state: SessionState) -> dict:
        project = manager.project
        project.new_session()
        project.log.clear()
        project.log.update(f"# Build log of {project.root}\n")
        manager.queue_request(PlainAdviseRequest(tags=[PREBUILD_TAG], plain_data={}))
        return {"phase": "prebuild", "failed_step": None}

    return prebuild_node


def make_build_node(
    manager: AdviseManager, runner: StepRunner
) -> Callable[[SessionState], dict]:
    """Factory: returns a node closure that runs the build steps in order.

    The first failing step stops the build and queues an ErrorAdviseRequest
    carrying the step's tags and output. A step that cannot be started is
    treated the same way and also recorded in ``errors``.
    """

    def build_node(state: SessionState) -> dict:
        project = manager.project
        builders = project.config.builders
        if not builders:
            return {"phase": "build", "errors": [f"No build steps configured for {project.root}"]}

        for step in builders:
            errors: list[str] = []
            try:
                result = runner.run(project, step)
                ok, output = result.ok, result.output
            except BuildStepError as exc:
                ok, output = False, str(exc)
                errors.append(f"build_node error: {exc}")
            if not ok:
                logger.warning("Build step %d failed", step.id)
                manager.queue_request(
                    ErrorAdviseRequest(tags=step.tags, error=output, builder_id=step.id)
                )
                return {"phase": "build", "failed_step": step.id, "errors": errors}

        logger.info("All %d build steps succeeded", len(builders))
        return {"phase": "build", "failed_step": None}

    return build_node


def make_advise_node(
    manager: AdviseManager, store: ProjectRecipeStore
) -> Callable[[SessionState], dict]:
    """Factory: returns a node closure that drains the advise queue.

    The recipes replace whatever the store held. Advisor exceptions are not
    caught and abort the session.
    """

    def advise_node(state: SessionState) -> dict:
        recipes = manager.advise()
        store.save(recipes)
        return {"recipes": recipes}

    return advise_node


def apply_node(state: SessionState) -> dict:
    """Apply every recipe of the last advise cycle, in order."""
    applied: list[str] = []
    errors: list[str] = []
    for recipe in state["recipes"]:
        if recipe.apply():
            applied.append(recipe.desc)
        else:
            errors.append(f"apply_node: recipe '{recipe.desc}' was not fully applied")
    return {"applied": applied, "errors": errors}


def decide_fn(state: SessionState) -> str:
    """Route after an advise cycle.

    Returns:
        "build" when pre-build checks found nothing, "apply" when recipes
        exist and auto-apply is on, "done" otherwise.
    """
    if state["phase"] == "prebuild" and not state["recipes"]:
        return "build"
    if state["recipes"] and state["auto_apply"]:
        return "apply"
    return "done"


def build_session_graph(
    manager: AdviseManager,
    store: ProjectRecipeStore,
    runner: StepRunner | None = None,
):
    """Build and compile the session StateGraph.

    No checkpointer; state lives in memory for one ``invoke``.

    Args:
        manager: AdviseManager bound to the project being built.
        store: Where each advise cycle's recipes are persisted.
        runner: Build step runner; a StepRunner by default.

    Returns:
        CompiledStateGraph ready to invoke with ``make_initial_state``.

    Raises:
        GraphBuildError: If graph construction fails.
    """
    try:
        graph = StateGraph(SessionState)

        graph.add_node("prebuild_node", make_prebuild_node(manager))
        graph.add_node("build_node", make_build_node(manager, runner or StepRunner()))
        graph.add_node("advise_node", make_advise_node(manager, store))
        graph.add_node("apply_node", apply_node)

        graph.add_edge(START, "prebuild_node")
        graph.add_edge("prebuild_node", "advise_node")
        graph.add_edge("build_node", "advise_node")
        graph.add_conditional_edges(
            "advise_node",
            decide_fn,
            {
                "build": "build_node",
                "apply": "apply_node",
                "done": END,
            },
        )
        graph.add_edge("apply_node", END)

        return graph.compile()

    except Exception as exc:
        raise GraphBuildError(f"Failed to build session graph: {exc}") from exc

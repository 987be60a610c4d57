from pathlib import Path

import pytest

from wasm_advisor.advisors.base import NOT_HANDLED, AdviseResult
from wasm_advisor.advisors.builtin.errors_not_handled import ErrorsNotHandledAdvisor
from wasm_advisor.advisors.manager import AdviseManager
from wasm_advisor.advisors.pipeline import (
    AdvisorPipelineConfig,
    AdvisorPipelineConfigItem,
    AdvisorPipelineFactory,
    AdvisorRef,
)
from wasm_advisor.advisors.registry import AdvisorRegistry
from wasm_advisor.models.config import BuildStep
from wasm_advisor.project import Project
from wasm_advisor.registries import default_registries


class RecordingAdvisor:
    """Advisor double that records every call in a shared ``calls`` list.

    ``result`` is either an AdviseResult or a callable
    ``(project, request, request_list) -> AdviseResult``.
    """

    desc = "advisor used in tests"

    def __init__(self, advisor_type, result=NOT_HANDLED, calls=None):
        self.type = advisor_type
        self.result = result
        self.calls = calls if calls is not None else []

    def advise(self, project, request, request_list):
        self.calls.append((self.type, request))
        if callable(self.result):
            return self.result(project, request, request_list)
        return self.result


@pytest.fixture
def project_root(tmp_path):
    root = tmp_path / "proj"
    root.mkdir()
    return root


@pytest.fixture
def project(project_root):
    return Project(project_root)


@pytest.fixture
def project_with_builders(project):
    project.update_build_config(builders=[
        BuildStep(id=1, command="./configure", args="--prefix=/usr", tags=["configure"]),
        BuildStep(id=2, command="make", args="-j4", tags=["make"]),
    ])
    return project


@pytest.fixture
def registries():
    return default_registries()


@pytest.fixture
def write_file():
    """Write ``lines`` joined by newlines to ``path`` and return the path as str."""

    def _write(path: Path, lines: list[str]) -> str:
        path.write_text("\n".join(lines), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def make_manager(project):
    """Build an AdviseManager over in-memory pipelines.

    Takes ``{tag: [advisor, ...]}``; every advisor instance is registered under
    its own type, and the real fallback advisor is registered as well.
    """

    def _make(pipelines: dict, register_fallback: bool = True) -> AdviseManager:
        registry = AdvisorRegistry()
        items = []
        for tag, advisors in pipelines.items():
            for advisor in advisors:
                if not registry.has(advisor.type):
                    registry.register(advisor.type, lambda a=advisor: a)
            items.append(AdvisorPipelineConfigItem(
                tag=tag,
                advisors=[AdvisorRef(type=a.type) for a in advisors],
            ))
        if register_fallback:
            registry.register(ErrorsNotHandledAdvisor.TYPE, ErrorsNotHandledAdvisor)
        config = AdvisorPipelineConfig(pipelines=items)
        return AdviseManager(project, AdvisorPipelineFactory(config, registry), registry)

    return _make


@pytest.fixture
def handled():
    """AdviseResult factory for a handled request with a recipe from ``advisor``."""
    from wasm_advisor.actions.show_suggestion import ShowSuggestionAction
    from wasm_advisor.recipe import Recipe

    def _handled(project, advisor, request, need_propagation=False, new_request_queue=None):
        recipe = Recipe(
            project,
            f"Recipe from {advisor.type}",
            advisor,
            request,
            ShowSuggestionAction("error", f"{advisor.type} suggestion"),
        )
        return AdviseResult(
            handled=True,
            recipe=recipe,
            need_propagation=need_propagation,
            new_request_queue=new_request_queue,
        )

    return _handled

"""Pre-build check for unknown ``${...}`` template literals in the build config."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from wasm_advisor.actions.show_suggestion import ShowSuggestionAction
from wasm_advisor.advisors.base import NOT_HANDLED, AdviseResult
from wasm_advisor.recipe import Recipe
from wasm_advisor.requests.common import PlainAdviseRequest

if TYPE_CHECKING:
    from wasm_advisor.advisors.registry import AdvisorRegistry
    from wasm_advisor.project.project import Project
    from wasm_advisor.requests.base import AdviseRequest

ENV_LABELS = {"cflags": "Compiler flags", "ldflags": "Linker flags"}


def markdown_table(header: list[str], rows: list[list[str]]) -> str:
    lines = [
        "| " + " | ".join(header) + " |",
        "| " + " | ".join("---" for _ in header) + " |",
    ]
    lines.extend("| " + " | ".join(row) + " |" for row in rows)
    return "\n".join(lines)


def _quoted(values: list[str]) -> str:
    return ", ".join(f"`{v}`" for v in values)


class TemplateLiteralValidateAdvisor:
    TYPE = "TemplateLiteralValidateAdvisor"
    type = TYPE
    desc = "Advise issues related to invalid template literals"

    def _findings(self, project: Project) -> dict[str, str]:
        findings: dict[str, str] = {}

        invalid_steps = []
        for i, step in enumerate(project.config.builders, start=1):
            bad_args = project.validate_template_literals(step.args)
            bad_path = project.validate_template_literals(step.root_build_file_path)
            if bad_args:
                invalid_steps.append([f"**{i}**", "Arguments", _quoted(bad_args)])
            if bad_path:
                invalid_steps.append([f"**{i}**", "Working directory", _quoted(bad_path)])
        if invalid_steps:
            findings["Build Steps"] = markdown_table(
                ["Build Step #", "Invalid Config", "Invalid Values"], invalid_steps
            )

        invalid_envs = []
        for env, value in project.config.envs.items():
            bad = project.validate_template_literals(value)
            if bad:
                invalid_envs.append([ENV_LABELS.get(env, env), _quoted(bad)])
        if invalid_envs:
            findings["Environment Variables"] = markdown_table(
                ["Environment Variables", "Invalid Values"], invalid_envs
            )
        return findings

    def advise(
        self,
        project: Project,
        request: AdviseRequest,
        request_list: Sequence[AdviseRequest],
    ) -> AdviseResult:
        if not isinstance(request, PlainAdviseRequest) or "pre-build" not in request.tags:
            return NOT_HANDLED
        findings = self._findings(project)
        if not findings:
            return NOT_HANDLED

        details = "\n\n".join(f"**_{section}_**\n{table}" for section, table in findings.items())
        available = "\n".join(f"- {t}" for t in project.get_template_literals())
        action = ShowSuggestionAction(
            "error",
            "Below are the `invalid` template literals we detected in project configuration:"
            f"\n\n{details}\n\n#\n\n"
            f"You can refer to below available template literals to modify accordingly:\n{available}",
            None,
            None,
        )
        return AdviseResult(
            handled=True,
            recipe=Recipe(
                project,
                "Recipe for invalid template literals in project config",
                self,
                request,
                action,
            ),
            # other pre-build checks still run
            need_propagation=True,
        )


def register(registry: AdvisorRegistry) -> None:
    registry.register(TemplateLiteralValidateAdvisor.TYPE, TemplateLiteralValidateAdvisor)

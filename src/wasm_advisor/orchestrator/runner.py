"""Run native build step commands for a project."""

from __future__ import annotations

import logging
import os
import subprocess
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from wasm_advisor.orchestrator.exceptions import BuildStepError

if TYPE_CHECKING:
    from wasm_advisor.models.config import BuildStep
    from wasm_advisor.project.project import Project

logger = logging.getLogger(__name__)

DEFAULT_STEP_TIMEOUT = 3600


class StepResult(BaseModel):
    """Outcome of one build step command."""

    model_config = ConfigDict(frozen=True)

    step_id: int
    command: str
    cwd: str
    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class StepRunner:
    """Runs a build step through the shell with the project's flags exported.

    ``CFLAGS`` and ``LDFLAGS`` come from the build config envs; template
    literals in the command, arguments and working directory are expanded
    first.
    """

    def __init__(self, timeout: int = DEFAULT_STEP_TIMEOUT) -> None:
        self.timeout = timeout

    def _env(self, project: Project) -> dict[str, str]:
        env = dict(os.environ)
        for name, value in project.config.envs.items():
            if value:
                env[name.upper()] = project.eval_template_literals(value)
        return env

    def run(self, project: Project, step: BuildStep) -> StepResult:
        """Run ``step`` and capture its combined output.

        Raises:
            BuildStepError: If the working directory is missing or the command
                cannot be started or times out.
        """
        cwd = project.eval_template_literals(step.root_build_file_path)
        command = project.eval_template_literals(f"{step.command} {step.args}".strip())
        if not os.path.isdir(cwd):
            raise BuildStepError(f"Working directory of build step {step.id} not found: {cwd}")

        logger.info("Running build step %d: %s (in %s)", step.id, command, cwd)
        project.log.update(f"\n## Build step {step.id}: `{command}`\n\n")
        try:
            proc = subprocess.run(
                command,
                shell=True,
                cwd=cwd,
                env=self._env(project),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise BuildStepError(f"Build step {step.id} failed to run: {exc}") from exc

        output = (proc.stdout or "") + (proc.stderr or "")
        project.log.update(f"```\n{output}\n```\n")
        return StepResult(
            step_id=step.id,
            command=command,
            cwd=cwd,
            returncode=proc.returncode,
            output=output,
        )

"""A native project being ported: root directory, build config and session state."""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path

from pydantic import ValidationError

from wasm_advisor.actions.build_step_change import BuildStepChangeManager
from wasm_advisor.actions.file_change import FileChangeManager
from wasm_advisor.constants import BUILD_DIR, CONFIG_FILE, LOG_FILE, STATE_DIR
from wasm_advisor.models.config import BuildStep, ProjectConfig
from wasm_advisor.project.exceptions import ProjectConfigError
from wasm_advisor.project.log import ProjectLog

logger = logging.getLogger(__name__)

TEMPLATE_LITERAL_RE = re.compile(r"\$\{([^${]*)\}")


class Project:
    """Capability surface handed to advisors and actions.

    Args:
        root: Project root directory. Stored as an absolute path string.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = str(Path(root).resolve())
        self.state_dir = Path(self.root) / STATE_DIR
        self.config_path = self.state_dir / CONFIG_FILE
        self.log = ProjectLog(self.state_dir / LOG_FILE)
        self.constant = {
            "projectDist": os.path.join(self.root, BUILD_DIR),
            "projectRoot": self.root,
        }
        self.config = self._load_config()
        self.file_change_manager = FileChangeManager()
        self.build_step_change_manager = BuildStepChangeManager()

    def _load_config(self) -> ProjectConfig:
        if not self.config_path.exists():
            return ProjectConfig()
        try:
            raw = json.loads(self.config_path.read_text(encoding="utf-8"))
            return ProjectConfig.model_validate(raw)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise ProjectConfigError(f"Failed to load {self.config_path}: {exc}") from exc

    def save_config(self) -> None:
        self.state_dir.mkdir(parents=True, exist_ok=True)
        payload = self.config.model_dump(mode="json", by_alias=True)
        self.config_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")

    def update_build_config(
        self,
        envs: dict[str, str] | None = None,
        options: dict[str, bool] | None = None,
        builders: list[BuildStep] | None = None,
    ) -> None:
        """Replace the given parts of the build config and write it back."""
        if envs is not None:
            self.config.envs = dict(envs)
        if options is not None:
            self.config.options = dict(options)
        if builders is not None:
            self.config.builders = list(builders)
        self.save_config()
        logger.debug("Build config of %s updated", self.root)

    def new_session(self) -> None:
        """Start a build session: edits are tracked against the files as they are now."""
        self.file_change_manager = FileChangeManager()
        self.build_step_change_manager = BuildStepChangeManager()

    def get_template_literals(self) -> list[str]:
        return [f"${{{name}}} = {value}" for name, value in self.constant.items()]

    def eval_template_literals(self, s: str) -> str:
        for name, value in self.constant.items():
            s = s.replace(f"${{{name}}}", value)
        return s

    def validate_template_literals(self, s: str) -> list[str]:
        """Return every ``${name}`` in ``s`` whose name is not a known constant."""
        return [
            m.group(0)
            for m in TEMPLATE_LITERAL_RE.finditer(s or "")
            if m.group(1) not in self.constant
        ]

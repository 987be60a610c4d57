"""Advisor pipelines: named, ordered advisor lists selected by request tag.

The pipeline file is read once at start-up::

    {
      "__type__": "AdvisorPipelineConfig",
      "pipelines": [
        {"tag": "make", "advisors": [{"__type__": "HeaderMissingAdvisor"}, ...]},
        ...
      ]
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wasm_advisor.advisors.exceptions import PipelineConfigError, PipelineConfigMissingError
from wasm_advisor.advisors.registry import AdvisorRegistry

logger = logging.getLogger(__name__)

CONFIG_TYPE = "AdvisorPipelineConfig"


class AdvisorRef(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str = Field(alias="__type__")
    args: str | None = None


class AdvisorPipelineConfigItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: str
    advisors: list[AdvisorRef] = Field(default_factory=list)


class AdvisorPipelineConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str = Field(default=CONFIG_TYPE, alias="__type__")
    pipelines: list[AdvisorPipelineConfigItem] = Field(default_factory=list)

    def item_for_tag(self, tag: str) -> AdvisorPipelineConfigItem | None:
        for item in self.pipelines:
            if item.tag == tag:
                return item
        return None

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def load(cls, path: str | Path) -> AdvisorPipelineConfig:
        """Load the pipeline file.

        Raises:
            PipelineConfigMissingError: If the file does not exist.
            PipelineConfigError: If it is not a valid AdvisorPipelineConfig.
        """
        file_path = Path(path)
        try:
            raw = json.loads(file_path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            msg = f"Tried to load {CONFIG_TYPE} from a nonexistent file: {file_path}"
            logger.error(msg)
            raise PipelineConfigMissingError(msg) from exc
        except (OSError, json.JSONDecodeError) as exc:
            msg = f"Failed to load {CONFIG_TYPE} from file {file_path} due to error: {exc}"
            logger.error(msg)
            raise PipelineConfigError(msg) from exc

        if not isinstance(raw, dict) or raw.get("__type__") != CONFIG_TYPE:
            got = raw.get("__type__") if isinstance(raw, dict) else type(raw).__name__
            raise PipelineConfigError(f"{file_path}: expects {CONFIG_TYPE} but got {got}")
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise PipelineConfigError(f"{file_path}: invalid {CONFIG_TYPE}: {exc}") from exc


class AdvisorPipeline(BaseModel):
    model_config = ConfigDict(frozen=False, arbitrary_types_allowed=True)

    tag: str
    advisors: list[Any] = Field(default_factory=list)


class AdvisorPipelineFactory:
    """Instantiate the advisor pipelines configured for a request's tags."""

    def __init__(self, config: AdvisorPipelineConfig, registry: AdvisorRegistry) -> None:
        self.config = config
        self.registry = registry

    def create_pipelines(self, tags: str | list[str]) -> list[AdvisorPipeline]:
        if isinstance(tags, str):
            tags = [tags]

        pipelines: list[AdvisorPipeline] = []
        for tag in tags:
            item = self.config.item_for_tag(tag)
            if item is None or not item.advisors:
                continue
            advisors = []
            for ref in item.advisors:
                if not self.registry.has(ref.type):
                    logger.warning("Pipeline '%s' references unknown advisor %s", tag, ref.type)
                    continue
                advisors.append(self.registry.create(ref.type, ref.args))
            pipelines.append(AdvisorPipeline(tag=tag, advisors=advisors))
        return pipelines

"""Pydantic models for a project's build configuration."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ENV_TYPES = ("cflags", "ldflags")


class ArgUpdateType(str, Enum):
    """How a BuildArg is folded into an existing argument string."""

    MERGE = "merge"
    REPLACE = "replace"
    DELETE = "delete"
    DELETE_ALL = "deleteAll"


class BuildArg(BaseModel):
    """A single compiler/linker/builder argument change."""

    model_config = ConfigDict(frozen=False, use_enum_values=True)

    option: str
    value: str | None = None
    type: ArgUpdateType = ArgUpdateType.MERGE


class BuildStep(BaseModel):
    """One native build command run by the build orchestrator."""

    model_config = ConfigDict(frozen=False, alias_generator=to_camel, populate_by_name=True)

    id: int
    type: str = Field(default="NativeBuilder", alias="__type__")
    desc: str = ""
    command: str
    args: str = ""
    root_build_file_path: str = "${projectRoot}"
    tags: list[str] = Field(default_factory=lambda: ["native"])


class ProjectConfig(BaseModel):
    """Build configuration persisted at ``<root>/.wasm_advisor/config.json``."""

    model_config = ConfigDict(frozen=False, alias_generator=to_camel, populate_by_name=True)

    envs: dict[str, str] = Field(default_factory=lambda: {env: "" for env in ENV_TYPES})
    options: dict[str, bool] = Field(default_factory=dict)
    builders: list[BuildStep] = Field(default_factory=list)

    def builder_by_id(self, builder_id: int) -> BuildStep | None:
        for step in self.builders:
            if step.id == builder_id:
                return step
        return None

"""Request types raised by builders (errors) and the orchestrator (pre-build checks)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, field_validator

from wasm_advisor.actions.regions import FileLocation
from wasm_advisor.factory.json_factory import TYPE_KEY, JsonFactories, check_json_type

if TYPE_CHECKING:
    from wasm_advisor.project.project import Project


class _TaggedRequest(BaseModel):
    model_config = ConfigDict(frozen=False)

    tags: list[str]

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value


class ErrorAdviseRequest(_TaggedRequest):
    """A failed build command: its output, and where it failed if known."""

    TYPE: ClassVar[str] = "ErrorAdviseRequest"

    error: str
    location: FileLocation | None = None
    builder_id: int = -1

    def to_json(self) -> dict[str, Any]:
        return {
            TYPE_KEY: self.TYPE,
            "tags": list(self.tags),
            "error": self.error,
            "location": self.location.to_json() if self.location else None,
            "builder": self.builder_id,
        }

    @classmethod
    def from_json(cls, project: Project, o: dict[str, Any]) -> ErrorAdviseRequest:
        check_json_type(cls.TYPE, o)
        return cls(
            tags=o.get("tags", []),
            error=o.get("error", ""),
            location=FileLocation.from_json(o["location"]) if o.get("location") else None,
            builder_id=o.get("builder", -1),
        )


class PlainAdviseRequest(_TaggedRequest):
    """A trigger with an arbitrary JSON payload, e.g. the pre-build checks."""

    TYPE: ClassVar[str] = "PlainAdviseRequest"

    plain_data: Any = None

    def to_json(self) -> dict[str, Any]:
        return {TYPE_KEY: self.TYPE, "tags": list(self.tags), "plainData": self.plain_data}

    @classmethod
    def from_json(cls, project: Project, o: dict[str, Any]) -> PlainAdviseRequest:
        check_json_type(cls.TYPE, o)
        return cls(tags=o.get("tags", []), plain_data=o.get("plainData"))


def register(factories: JsonFactories) -> None:
    factories.register(ErrorAdviseRequest.TYPE, ErrorAdviseRequest.from_json)
    factories.register(PlainAdviseRequest.TYPE, PlainAdviseRequest.from_json)

"""Line and build-step regions targeted by edit actions.

Both region kinds are half-open ranges. A region that will be edited later in
the same session has to be shifted by the net size change of every edit
applied before it; ``shift_for`` computes that shift and reports an intersection
as ``None`` so callers can treat conflicts as an ordinary outcome.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from wasm_advisor.actions.exceptions import BuildStepIntersectionError, FileIntersectionError
from wasm_advisor.factory.json_factory import TYPE_KEY, check_json_type


class FileLocation(BaseModel):
    """A diagnostic pointer (file, line, column) as reported by a compiler."""

    model_config = ConfigDict(frozen=True)

    file: str
    line: int
    col: int = 0

    def to_file_region(self) -> "FileRegion":
        return FileRegion(file=self.file, line_start=self.line, line_end=self.line + 1)

    def to_json(self) -> dict[str, Any]:
        return {TYPE_KEY: "FileLocation", **self.model_dump()}

    @classmethod
    def from_json(cls, o: dict[str, Any]) -> "FileLocation":
        check_json_type("FileLocation", o)
        return cls.model_validate(o)


class FileRegion(BaseModel):
    """Lines ``[line_start, line_end)`` of ``file``."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    file: str
    line_start: int
    line_end: int

    @model_validator(mode="after")
    def _check_lines(self) -> "FileRegion":
        if not self.line_end > self.line_start >= 0:
            raise ValueError(
                f"Invalid line numbers [{self.line_start}, {self.line_end}) for {self.file}"
            )
        return self

    def __str__(self) -> str:
        return f"{self.file}:[{self.line_start}, {self.line_end})"

    def is_intersected(self, other: "FileRegion") -> bool:
        """True if this region's start or end boundary falls inside ``other``."""
        if other.file != self.file:
            return False
        return (
            other.line_start <= self.line_start < other.line_end
            or other.line_start < self.line_end <= other.line_end
        )

    def shift_for(self, other: "FileRegion", n_new_lines: int) -> int | None:
        """Line shift caused by an earlier edit replacing ``other`` with ``n_new_lines`` lines.

        Returns None when this region intersects ``other``. A region that
        strictly contains ``other`` is shifted like any region after it.
        """
        if self.is_intersected(other):
            return None
        if other.file != self.file or other.line_start >= self.line_end:
            return 0
        return n_new_lines - (other.line_end - other.line_start)

    def lines_to_adjust(self, other: "FileRegion", n_new_lines: int) -> int:
        """Like ``shift_for`` but raises on intersection.

        Raises:
            FileIntersectionError: If this region intersects ``other``.
        """
        shift = self.shift_for(other, n_new_lines)
        if shift is None:
            raise FileIntersectionError(f"lines_to_adjust: {self} intersects with {other}")
        return shift

    def shifted(self, delta: int) -> "FileRegion":
        return FileRegion(
            file=self.file,
            line_start=self.line_start + delta,
            line_end=self.line_end + delta,
        )

    def to_json(self) -> dict[str, Any]:
        return {TYPE_KEY: "FileRegion", **self.model_dump(by_alias=True)}

    @classmethod
    def from_json(cls, o: dict[str, Any]) -> "FileRegion":
        check_json_type("FileRegion", o)
        return cls.model_validate(o)


class BuildStepRegion(BaseModel):
    """Build step indexes ``[i_start, i_end)``; an empty region inserts at ``i_start``."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    i_start: int
    i_end: int

    @model_validator(mode="before")
    @classmethod
    def _default_end(cls, data: Any) -> Any:
        if isinstance(data, dict) and "i_end" not in data and "iEnd" not in data:
            start = data.get("i_start", data.get("iStart"))
            return {**data, "i_end": start}
        return data

    @model_validator(mode="after")
    def _check_indexes(self) -> "BuildStepRegion":
        if not self.i_end >= self.i_start >= 0:
            raise ValueError(f"Invalid build step indexes [{self.i_start}, {self.i_end})")
        return self

    def __str__(self) -> str:
        return f"steps[{self.i_start}, {self.i_end})"

    def is_intersected(self, other: "BuildStepRegion") -> bool:
        return (
            other.i_start <= self.i_start < other.i_end
            or other.i_start < self.i_end <= other.i_end
        )

    def shift_for(self, other: "BuildStepRegion", n_new_steps: int) -> int | None:
        if self.is_intersected(other):
            return None
        if other.i_start >= self.i_end:
            return 0
        return n_new_steps - (other.i_end - other.i_start)

    def indexes_to_adjust(self, other: "BuildStepRegion", n_new_steps: int) -> int:
        """Index shift caused by an earlier build step change.

        Raises:
            BuildStepIntersectionError: If this region intersects ``other``.
        """
        shift = self.shift_for(other, n_new_steps)
        if shift is None:
            raise BuildStepIntersectionError(f"indexes_to_adjust: {self} intersects with {other}")
        return shift

    def shifted(self, delta: int) -> "BuildStepRegion":
        return BuildStepRegion(i_start=self.i_start + delta, i_end=self.i_end + delta)

    def to_json(self) -> dict[str, Any]:
        return {TYPE_KEY: "BuildStepRegion", **self.model_dump(by_alias=True)}

    @classmethod
    def from_json(cls, o: dict[str, Any]) -> "BuildStepRegion":
        check_json_type("BuildStepRegion", o)
        return cls.model_validate(o)

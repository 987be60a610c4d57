"""Line-based file edits and the per-session manager that serializes them."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any

from wasm_advisor.actions.regions import FileRegion
from wasm_advisor.factory.json_factory import TYPE_KEY, JsonFactories, check_json_type

if TYPE_CHECKING:
    from wasm_advisor.project.project import Project

logger = logging.getLogger(__name__)


def _write_atomic(path: Path, content: str) -> None:
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        if path.exists():
            os.chmod(tmp_name, path.stat().st_mode)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class FileChangeManager:
    """Registry of every file edit committed during one build session.

    Advisors compute their target lines against the file as it was before the
    session started. Edits are applied one at a time and each new edit is
    shifted by the net line change of the edits already applied above it in
    the same file. Overlapping edits are rejected.

    One manager belongs to exactly one session; ``Project.new_session``
    replaces it rather than sharing it.
    """

    def __init__(self) -> None:
        self._changes: dict[str, list[FileChangeAction]] = {}

    def history(self, file: str) -> list[FileChangeAction]:
        """Actions already applied to ``file``, in application order."""
        return list(self._changes.get(file, []))

    @property
    def files(self) -> list[str]:
        return list(self._changes)

    def apply(self, action: FileChangeAction) -> bool:
        file = action.region.file
        if action.region.line_start < 1:
            logger.error("File change outside the file: %s (%s)", action.desc, action.region)
            return False
        applied = self._changes.setdefault(file, [])
        actual_region = action.actual_file_region(applied)
        if actual_region is None:
            logger.error("File change conflicts for action: %s (%s)", action.desc, action.region)
            return False
        applied.append(action)
        self._update_file(actual_region, action.new_content)
        return True

    @staticmethod
    def _update_file(region: FileRegion, content: str | None) -> None:
        # Region lines are compiler line numbers, so line N lives at index N - 1
        path = Path(region.file)
        lines = path.read_text(encoding="utf-8").split("\n")
        start = region.line_start - 1
        replacement = content.split("\n") if content is not None else []
        lines[start:start + (region.line_end - region.line_start)] = replacement
        _write_atomic(path, "\n".join(lines))


class FileChangeAction:
    """Replace (or delete, when ``new_content`` is None) a region of lines in a file."""

    TYPE = "FileChange"

    def __init__(
        self,
        manager: FileChangeManager,
        desc: str,
        region: FileRegion,
        new_content: str | None,
    ) -> None:
        self.manager = manager
        self.desc = desc
        self.region = region
        self.new_content = new_content
        self.n_lines_new_content = len(new_content.split("\n")) if new_content is not None else 0

    @property
    def type(self) -> str:
        return self.TYPE

    def apply(self) -> bool:
        return self.manager.apply(self)

    def actual_file_region(self, changes: list[FileChangeAction]) -> FileRegion | None:
        """Where this edit lands after ``changes`` were applied to the same file.

        Returns None if this region intersects any of them.
        """
        delta = 0
        for change in changes:
            shift = self.region.shift_for(change.region, change.n_lines_new_content)
            if shift is None:
                logger.error("File change conflicts: %s with %s", self.region, change.region)
                return None
            delta += shift
        return self.region.shifted(delta)

    def to_json(self) -> dict[str, Any]:
        return {
            TYPE_KEY: self.TYPE,
            "desc": self.desc,
            "region": self.region.to_json(),
            "newContent": self.new_content,
        }

    @classmethod
    def from_json(cls, project: Project, o: dict[str, Any]) -> FileChangeAction:
        check_json_type(cls.TYPE, o)
        return cls(
            project.file_change_manager,
            o.get("desc", ""),
            FileRegion.from_json(o["region"]),
            o.get("newContent"),
        )


def register(factories: JsonFactories) -> None:
    factories.register(FileChangeAction.TYPE, FileChangeAction.from_json)

from pathlib import Path


class ProjectLog:
    """Append-only markdown build log shown to the user.

    Separate from process logging: this is the per-project ``log.md``.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def update(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(text)

    def content(self) -> str:
        if not self.path.exists():
            return ""
        return self.path.read_text(encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)

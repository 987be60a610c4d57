"""Plain-text search over a project tree (a ``grep -rn`` equivalent)."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class PatternMatch(BaseModel):
    """One line of one file containing the searched text."""

    model_config = ConfigDict(frozen=True)

    pattern: str
    root_dir: str
    file: str  # relative to root_dir
    line: int  # 1-based
    content: str


def find_pattern_in_files(
    pattern: str,
    root: str | Path,
    exclude_dirs: list[str] | None = None,
) -> list[PatternMatch]:
    """Find every line under ``root`` that contains ``pattern``.

    Args:
        pattern: Literal text to look for.
        root: Directory to search recursively.
        exclude_dirs: Directory names skipped wherever they appear.

    Returns:
        Matches in path order. Binary and unreadable files are skipped.
    """
    root_path = Path(root).resolve()
    excluded = set(exclude_dirs or [])
    matches: list[PatternMatch] = []

    for path in sorted(root_path.rglob("*")):
        # Skip symlinks to stay inside the project
        if path.is_symlink() or not path.is_file():
            continue
        relative = path.relative_to(root_path)
        if any(part in excluded for part in relative.parts[:-1]):
            continue
        try:
            text = path.read_text(encoding="utf-8")
        except (UnicodeDecodeError, OSError):
            continue
        for line_no, line in enumerate(text.split("\n"), start=1):
            if pattern in line:
                matches.append(PatternMatch(
                    pattern=pattern,
                    root_dir=str(root_path),
                    file=relative.as_posix(),
                    line=line_no,
                    content=line,
                ))
    return matches

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Action(Protocol):
    """A single mutation proposed by a recipe.

    Concrete actions expose a class-level ``TYPE`` tag, which is also the
    ``__type__`` discriminator of their JSON form, and a matching
    ``from_json(project, o)`` classmethod registered on the action factories.
    """

    type: str
    desc: str

    def apply(self) -> bool:
        """Perform the mutation; False when it could not be applied."""

    def to_json(self) -> dict[str, Any]:
        """JSON form carrying the ``__type__`` discriminator."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class AdviseRequest(Protocol):
    """Diagnostic input routed to advisor pipelines by its ``tags``."""

    tags: list[str]

    def to_json(self) -> dict[str, Any]:
        """JSON form carrying the ``__type__`` discriminator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from wasm_advisor.project.project import Project
    from wasm_advisor.requests.base import AdviseRequest


class AdviseResult(BaseModel):
    """What an advisor decided about one request.

    ``handled`` without ``need_propagation`` stops the dispatch of that
    request. ``new_request_queue``, when set, replaces the remaining queue.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    handled: bool = False
    recipe: Any = None
    need_propagation: bool = False
    new_request_queue: list[Any] | None = None


NOT_HANDLED = AdviseResult(handled=False)


@runtime_checkable
class Advisor(Protocol):
    """Stateless rule matched against advise requests."""

    type: str
    desc: str

    def advise(
        self,
        project: Project,
        request: AdviseRequest,
        request_list: Sequence[AdviseRequest],
    ) -> AdviseResult:
        """Decide whether ``request`` is handled; ``request_list`` is read-only."""


# Called with the optional ``args`` string from the pipeline config
AdvisorFactory = Callable[..., Advisor]

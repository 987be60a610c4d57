"""The three type registries a session needs, built once at start-up."""

from __future__ import annotations

from wasm_advisor import actions, requests
from wasm_advisor.advisors import builtin
from wasm_advisor.advisors.registry import AdvisorRegistry
from wasm_advisor.factory.json_factory import JsonFactories


class Registries:
    """Action and request deserializers plus advisor factories."""

    def __init__(
        self,
        actions: JsonFactories | None = None,
        requests: JsonFactories | None = None,
        advisors: AdvisorRegistry | None = None,
    ) -> None:
        self.actions = actions if actions is not None else JsonFactories("Action")
        self.requests = requests if requests is not None else JsonFactories("AdviseRequest")
        self.advisors = advisors if advisors is not None else AdvisorRegistry()


def default_registries() -> Registries:
    """Registries populated with every built-in action, request and advisor."""
    registries = Registries()
    actions.register_all(registries.actions)
    requests.register(registries.requests)
    builtin.register_all(registries.advisors)
    return registries

"""Typed JSON factories keyed by the ``__type__`` discriminator."""

import json
import logging
from typing import Any, Callable, Generic, TypeVar

from wasm_advisor.factory.exceptions import (
    DeserializeError,
    DuplicateRegistrationError,
    JsonTypeMismatchError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

JsonObject = dict[str, Any]

# (project, json) -> instance
FromJsonMethod = Callable[[Any, JsonObject], T]

TYPE_KEY = "__type__"


def check_json_type(expected: str, o: Any) -> None:
    """Raise JsonTypeMismatchError unless ``o`` carries the expected discriminator."""
    actual = o.get(TYPE_KEY) if isinstance(o, dict) else None
    if actual != expected:
        raise JsonTypeMismatchError(f"Json expects {expected} but got {actual}")


class JsonFactories(Generic[T]):
    """Registry of ``from_json`` deserializers for one polymorphic family."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._map: dict[str, FromJsonMethod[T]] = {}

    def register(self, type_tag: str, method: FromJsonMethod[T]) -> None:
        if type_tag in self._map:
            raise DuplicateRegistrationError(
                f"Factory for type {type_tag} has already been registered."
            )
        self._map[type_tag] = method
        logger.info("<< %s >> registered %s", self.name, type_tag)

    def has(self, type_tag: str) -> bool:
        return type_tag in self._map

    def factories_map(self) -> dict[str, FromJsonMethod[T]]:
        return dict(self._map)

    def from_json(self, project: Any, o: JsonObject) -> T | None:
        method = self._map.get(o.get(TYPE_KEY)) if isinstance(o, dict) else None
        if method is None:
            return None
        return method(project, o)

    def from_json_array(self, project: Any, arr: list[JsonObject]) -> list[T]:
        """Build a list of typed instances.

        Raises:
            DeserializeError: If any element has an unregistered ``__type__``.
        """
        result: list[T] = []
        for o in arr:
            instance = self.from_json(project, o)
            if instance is None:
                raise DeserializeError(
                    f"<< {self.name} >> from_json() returns None for {json.dumps(o, default=str)}."
                )
            result.append(instance)
        return result

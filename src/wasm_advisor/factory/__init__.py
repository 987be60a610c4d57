"""JSON factory registries and their errors."""

from wasm_advisor.factory.exceptions import (
    DeserializeError,
    DuplicateRegistrationError,
    FactoryError,
    JsonTypeMismatchError,
)
from wasm_advisor.factory.json_factory import (
    TYPE_KEY,
    JsonFactories,
    JsonObject,
    check_json_type,
)

__all__ = [
    "DeserializeError",
    "DuplicateRegistrationError",
    "FactoryError",
    "JsonFactories",
    "JsonObject",
    "JsonTypeMismatchError",
    "TYPE_KEY",
    "check_json_type",
]

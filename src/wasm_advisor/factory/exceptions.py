"""Exceptions for JSON factory registration and deserialization."""


class FactoryError(Exception):
    """Base exception for all JSON factory operations."""

    code = "JSONFACTORY_GENERAL"


class DuplicateRegistrationError(FactoryError):
    """Raised when a ``__type__`` tag is registered twice on one factory."""

    code = "JSONFACTORY_DUP_REG"


class DeserializeError(FactoryError):
    """Raised when a JSON object cannot be turned back into a typed instance."""

    code = "JSONFACTORY_DESERIALIZE_FAIL"


class JsonTypeMismatchError(DeserializeError):
    """Raised when the ``__type__`` discriminator is not the one a deserializer expects."""

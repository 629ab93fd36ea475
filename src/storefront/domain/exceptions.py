"""Domain-level exceptions.

Every failure a component reports is a subclass of DomainException so the
gateway and the CLI can catch them uniformly and map each kind to their own
status codes.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A required field is missing or malformed (invalid input)."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(DomainException):
    """A stock adjustment would leave a product with negative stock."""


class PersistenceError(DomainException):
    """The document store failed, or returned a document we cannot decode."""

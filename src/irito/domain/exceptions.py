"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the boundary layer (CLI) can catch them uniformly, while still telling
"not found" apart from "rejected" when it picks an exit status.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):
    """No product matches the requested code or id."""


class InsufficientStockError(ValidationError):
    """A mutation would drive current stock below zero."""


class InvalidInputError(ValidationError):
    """A request payload is malformed or incomplete."""


class DuplicateProductCodeError(ValidationError):
    """Another product already uses this code."""

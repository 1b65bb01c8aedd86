"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the outer layers can catch them uniformly and map them to a response.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConflictError(DomainException):
    """A uniqueness constraint would be violated."""


class ConcurrentModificationError(ConflictError):
    """The aggregate was changed by someone else since it was loaded."""

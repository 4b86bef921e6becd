"""Domain-level exceptions.

Services and repositories raise these errors to express business rule
violations or storage failures. Route handlers catch them and map to
HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""

    def __init__(self, message: str = "Duplicate key", field: str | None = None):
        self.field = field
        super().__init__(message)


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class RepositoryError(DomainError):
    """Storage layer failed for a reason other than a uniqueness conflict."""

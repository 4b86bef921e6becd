from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user record storage.

    Implementations raise DuplicateError when a write would break the
    email/rfc uniqueness invariant and RepositoryError for any other
    storage failure. Missing records are reported as None/False.
    """
    def save(self, user: User) -> User:
        """Insert a new user record and return it as stored."""
        ...

    def find_all(self) -> list[User]:
        """Return every stored record in storage order."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def update(self, user_id: str, changes: dict) -> User | None:
        """Apply field changes to a user. Return the updated User or None if not found."""
        ...

    def delete(self, user_id: str) -> bool:
        """Delete a user. Return True if a record was removed."""
        ...

"""User service: business logic for the user record CRUD operations.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from datetime import date

from domain.model.errors import NotFoundError, ValidationError
from domain.model.user import User
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)


def create_user(
    repo: UserRepository,
    name: str,
    email: str,
    phone: str,
    birth_date: date,
    gender: str,
    rfc: str,
) -> User:
    """Create and persist a new user record.

    Raises:
        DuplicateError: email or rfc already registered
        RepositoryError: storage failure
    """
    user = User.create(
        name=name,
        email=email,
        phone=phone,
        birth_date=birth_date,
        gender=gender,
        rfc=rfc,
    )
    return repo.save(user)


def list_users(repo: UserRepository) -> list[User]:
    return repo.find_all()


def get_user(repo: UserRepository, user_id: str) -> User:
    """Return the user with the given id or raise NotFoundError."""
    user = repo.get_by_id(user_id)
    if not user:
        raise NotFoundError(f"User {user_id} not found")
    return user


def update_user(repo: UserRepository, user_id: str, changes: dict) -> User:
    """Apply a partial or full set of field changes to a user.

    Raises:
        ValidationError: unknown field name
        NotFoundError: no user with this id
        DuplicateError: new email or rfc belongs to another user
    """
    unknown = set(changes) - set(User.MUTABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")

    if not changes:
        # Nothing to write; still report a missing record as not found
        return get_user(repo, user_id)

    user = repo.update(user_id, changes)
    if not user:
        raise NotFoundError(f"User {user_id} not found")
    return user


def delete_user(repo: UserRepository, user_id: str) -> None:
    if not repo.delete(user_id):
        raise NotFoundError(f"User {user_id} not found")
    logger.info("User removed", extra={"userId": user_id})

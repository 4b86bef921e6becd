"""In-memory implementation of UserRepository for testing."""

from dataclasses import replace

from domain.model.errors import DuplicateError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    def _check_unique(self, candidate: User, exclude_id: str | None = None) -> None:
        for other in self.store.values():
            if other.id == exclude_id:
                continue
            for field in User.UNIQUE_FIELDS:
                if getattr(other, field) == getattr(candidate, field):
                    raise DuplicateError("Email or RFC already registered", field=field)

    # ── write operations ─────────────────────────────────────

    def save(self, user: User) -> User:
        self._check_unique(user)
        self.store[user.id] = replace(user)
        return replace(user)

    def update(self, user_id: str, changes: dict) -> User | None:
        current = self.store.get(user_id)
        if not current:
            return None

        candidate = replace(current)
        candidate.apply(changes)
        self._check_unique(candidate, exclude_id=user_id)
        self.store[user_id] = candidate
        return replace(candidate)

    def delete(self, user_id: str) -> bool:
        return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def find_all(self) -> list[User]:
        return [replace(u) for u in self.store.values()]

    def get_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        return replace(user) if user else None

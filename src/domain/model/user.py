"""User record domain model."""

import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone


@dataclass
class User:
    """A user record stored in the usuarios collection."""

    UNIQUE_FIELDS = ('email', 'rfc')
    MUTABLE_FIELDS = ('name', 'email', 'phone', 'birth_date', 'gender', 'rfc')

    id: str
    name: str
    email: str
    phone: str
    birth_date: date
    gender: str
    rfc: str
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def create(
        name: str,
        email: str,
        phone: str,
        birth_date: date,
        gender: str,
        rfc: str,
    ) -> 'User':
        """Build a new record with a generated id and fresh timestamps."""
        now = datetime.now(timezone.utc)
        return User(
            id=uuid.uuid4().hex,
            name=name,
            email=email,
            phone=phone,
            birth_date=birth_date,
            gender=gender,
            rfc=rfc,
            created_at=now,
            updated_at=now,
        )

    def apply(self, changes: dict) -> None:
        """Overwrite the given fields in place and refresh updated_at."""
        for key, value in changes.items():
            setattr(self, key, value)
        self.updated_at = datetime.now(timezone.utc)

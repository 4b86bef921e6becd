"""MongoDB implementation of UserRepository.

Documents use the usuarios field names (telefono, fechaN, genero,
createdAt, updatedAt) so records written by earlier clients of the same
collection, including ones keyed by ObjectId, stay readable.
"""

from datetime import date, datetime, time, timezone
from logging import getLogger

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, RepositoryError
from domain.model.user import User

logger = getLogger(__name__)

# Domain attribute -> stored document key
FIELD_NAMES = {
    'name': 'name',
    'email': 'email',
    'phone': 'telefono',
    'birth_date': 'fechaN',
    'gender': 'genero',
    'rfc': 'rfc',
    'created_at': 'createdAt',
    'updated_at': 'updatedAt',
}


def _date_to_bson(value: date) -> datetime:
    """BSON has no date type; store birth dates as UTC midnight."""
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def _bson_to_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _duplicate_field(error: DuplicateKeyError) -> str | None:
    """Extract the offending field from a duplicate key error, if reported."""
    details = error.details or {}
    key_pattern = details.get('keyPattern') or details.get('keyValue') or {}
    return next(iter(key_pattern), None)


def _id_filter(user_id: str) -> dict:
    """Match our uuid hex ids as well as legacy ObjectId keys."""
    if ObjectId.is_valid(user_id):
        return {'_id': {'$in': [user_id, ObjectId(user_id)]}}
    return {'_id': user_id}


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    # ── indexes ──────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Ensure the unique indexes behind the email/rfc invariant."""
        from adapter.mongodb.indexes import ensure_unique_index

        results = [ensure_unique_index(self.collection, field) for field in User.UNIQUE_FIELDS]
        return all(results)

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model.

        Raises RepositoryError when the document lacks a required field.
        """
        try:
            return User(
                id=str(doc['_id']),
                name=doc['name'],
                email=doc['email'],
                phone=doc['telefono'],
                birth_date=_bson_to_date(doc['fechaN']),
                gender=doc['genero'],
                rfc=doc['rfc'],
                created_at=doc['createdAt'],
                updated_at=doc['updatedAt'],
            )
        except KeyError as e:
            logger.error("Malformed user document", extra={"userId": str(doc.get('_id')), "missing": e.args[0]})
            raise RepositoryError(f"Stored user document is missing field {e.args[0]!r}") from e

    def _to_document(self, fields: dict) -> dict:
        """Rename domain attributes to stored keys and convert dates."""
        doc = {}
        for key, value in fields.items():
            if key == 'birth_date' and not isinstance(value, datetime):
                value = _date_to_bson(value)
            doc[FIELD_NAMES.get(key, key)] = value
        return doc

    # ── write operations ─────────────────────────────────────

    def save(self, user: User) -> User:
        """Insert a new user record."""
        doc = self._to_document({
            '_id': user.id,
            'name': user.name,
            'email': user.email,
            'phone': user.phone,
            'birth_date': user.birth_date,
            'gender': user.gender,
            'rfc': user.rfc,
            'created_at': user.created_at,
            'updated_at': user.updated_at,
        })
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError as e:
            field = _duplicate_field(e)
            logger.warning("User creation failed: duplicate key", extra={"field": field})
            raise DuplicateError("Email or RFC already registered", field=field) from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"userId": user.id, "error": str(e)})
            raise RepositoryError(str(e)) from e

        logger.info("User created", extra={"userId": user.id})
        return user

    def update(self, user_id: str, changes: dict) -> User | None:
        """Apply changes and return the post-update record, or None if missing."""
        doc = self._to_document({**changes, 'updated_at': datetime.now(timezone.utc)})
        try:
            updated = self.collection.find_one_and_update(
                _id_filter(user_id),
                {'$set': doc},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            field = _duplicate_field(e)
            logger.warning("User update failed: duplicate key", extra={"userId": user_id, "field": field})
            raise DuplicateError("Email or RFC already registered", field=field) from e
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            raise RepositoryError(str(e)) from e

        if updated is None:
            logger.warning("User not found for update", extra={"userId": user_id})
            return None

        logger.info("User updated", extra={"userId": user_id, "fields": sorted(changes)})
        return self._to_domain(updated)

    def delete(self, user_id: str) -> bool:
        """Permanently delete a user record."""
        try:
            result = self.collection.delete_one(_id_filter(user_id))
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise RepositoryError(str(e)) from e

        if result.deleted_count == 0:
            return False

        logger.info("User deleted", extra={"userId": user_id})
        return True

    # ── read operations ──────────────────────────────────────

    def find_all(self) -> list[User]:
        """Return all users in natural storage order."""
        try:
            docs = list(self.collection.find())
        except PyMongoError as e:
            logger.error("Failed to list users", extra={"error": str(e)})
            raise RepositoryError(str(e)) from e

        return [self._to_domain(doc) for doc in docs]

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one(_id_filter(user_id))
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise RepositoryError(str(e)) from e

        if doc:
            return self._to_domain(doc)
        return None

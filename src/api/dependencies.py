from fastapi import HTTPException, Request

from adapter.mongodb.connection import DATABASE_NAME
from adapter.mongodb.user_repository import MongoUserRepository
from port.user_repository import UserRepository


def _get_db(request: Request):
    """Get MongoDB database from the client created at startup, raising 503 if unavailable."""
    client = getattr(request.app.state, "mongo_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Base de datos no disponible")
    return client[DATABASE_NAME]


def get_user_repo(request: Request) -> UserRepository:
    return MongoUserRepository(_get_db(request))

"""User record CRUD routes.

Endpoints:
- POST /api/usuarios: Create a user
- GET /api/usuarios: List all users
- GET /api/usuarios/{user_id}: Get one user
- PUT /api/usuarios/{user_id}: Update a user (partial or full)
- DELETE /api/usuarios/{user_id}: Delete a user

Handlers are sync so FastAPI runs the blocking pymongo calls in its threadpool.
"""

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_user_repo
from api.errors import error_response
from api.models import MessageResponse, UserCreateRequest, UserResponse, UserUpdateRequest
from domain.model.errors import DomainError, DuplicateError, NotFoundError, ValidationError
from domain.model.user import User
from port.user_repository import UserRepository
from services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/usuarios", tags=["usuarios"])

_ERROR_RESPONSES = {
    400: {"model": MessageResponse},
    404: {"model": MessageResponse},
    500: {"model": MessageResponse},
}


def _to_response(user: User) -> UserResponse:
    """Convert domain User to API UserResponse."""
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        phone=user.phone,
        birth_date=user.birth_date,
        gender=user.gender,
        rfc=user.rfc,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
def create_user(request: UserCreateRequest, repo: UserRepository = Depends(get_user_repo)):
    """Create a new user record."""
    try:
        user = user_service.create_user(
            repo,
            name=request.name,
            email=request.email,
            phone=request.phone,
            birth_date=request.birth_date,
            gender=request.gender,
            rfc=request.rfc,
        )
    except DuplicateError:
        return error_response(status.HTTP_400_BAD_REQUEST, "El correo o RFC ya están registrados.")
    except DomainError as e:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error al registrar el usuario", str(e))

    return _to_response(user)


@router.get("", response_model=list[UserResponse], responses={500: {"model": MessageResponse}})
def list_users(repo: UserRepository = Depends(get_user_repo)):
    """List every stored user. Not paginated."""
    try:
        users = user_service.list_users(repo)
    except DomainError as e:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error al obtener los usuarios", str(e))

    logger.info("Users listed", extra={"count": len(users)})
    return [_to_response(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse, responses=_ERROR_RESPONSES)
def get_user(user_id: str, repo: UserRepository = Depends(get_user_repo)):
    try:
        user = user_service.get_user(repo, user_id)
    except NotFoundError:
        return error_response(status.HTTP_404_NOT_FOUND, "Usuario no encontrado")
    except DomainError as e:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error al obtener el usuario", str(e))

    return _to_response(user)


@router.put("/{user_id}", response_model=UserResponse, responses=_ERROR_RESPONSES)
def update_user(
    user_id: str,
    request: UserUpdateRequest,
    repo: UserRepository = Depends(get_user_repo),
):
    """Update the fields present in the body; validators run on each of them."""
    try:
        user = user_service.update_user(repo, user_id, request.changes())
    except NotFoundError:
        return error_response(status.HTTP_404_NOT_FOUND, "Usuario no encontrado para actualizar")
    except DuplicateError:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "El correo o RFC ya están registrados en otro usuario.",
        )
    except ValidationError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, "Datos de usuario inválidos", str(e))
    except DomainError as e:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error al actualizar el usuario", str(e))

    return _to_response(user)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
def delete_user(user_id: str, repo: UserRepository = Depends(get_user_repo)):
    try:
        user_service.delete_user(repo, user_id)
    except NotFoundError:
        return error_response(status.HTTP_404_NOT_FOUND, "Usuario no encontrado para eliminar")
    except DomainError as e:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error al eliminar el usuario", str(e))

    return {"message": "Usuario eliminado con éxito"}

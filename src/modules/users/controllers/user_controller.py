from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_db
from modules.auth.dependencies import get_current_principal, require_admin
from modules.auth.principal import Principal
from modules.common.schemas import MessageResponse
from modules.users.models.user import UserRole
from modules.users.repositories.user_repository import UserRepository
from modules.users.schemas import (
    ChangePasswordRequest, UserCreate, UserListResponse, UserResponse, UserUpdate
)
from modules.users.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(UserRepository(db))


@router.get("", response_model=UserListResponse)
def list_users(
    role: Optional[UserRole] = Query(None, description="Filtrar por rol"),
    is_active: Optional[bool] = Query(None, description="Filtrar por estado activo"),
    search: Optional[str] = Query(None, description="Nombre, apellido o email"),
    principal: Principal = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    """Listar usuarios (solo ADMIN)"""
    users = service.list_users(principal, role=role, is_active=is_active, search=search)
    return UserListResponse(users=[UserResponse.model_validate(u) for u in users], total=len(users))


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    principal: Principal = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    return service.create_user(principal, payload)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    return service.get_user(principal, user_id)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    payload: UserUpdate,
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    """Actualizar un usuario. Para no-ADMIN, role e is_active se ignoran."""
    return service.update_user(principal, user_id, payload)


@router.put("/{user_id}/password", response_model=MessageResponse)
def change_password(
    user_id: str,
    payload: ChangePasswordRequest,
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    service.change_password(principal, user_id, payload)
    return MessageResponse(message="Password updated successfully")


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    principal: Principal = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    service.delete_user(principal, user_id)
    return MessageResponse(message="User deleted successfully")


@router.patch("/{user_id}/toggle-status", response_model=UserResponse)
def toggle_user_status(
    user_id: str,
    principal: Principal = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    return service.toggle_user_status(principal, user_id)

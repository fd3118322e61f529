import logging
from typing import List, Optional

from modules.access import Action, Resource, authorize, strip_protected_user_fields
from modules.access.policies import requires_current_password
from modules.auth.principal import Principal
from modules.auth.services.auth_service import AuthService
from modules.common.errors import ConflictError, NotFoundError, ValidationError
from modules.users.models.user import User, UserRole
from modules.users.repositories.user_repository import UserRepository
from modules.users.schemas import ChangePasswordRequest, UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, repository: UserRepository):
        self.users = repository

    def list_users(
        self,
        principal: Principal,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> List[User]:
        authorize(principal, Resource.USER, Action.LIST)
        return self.users.search(role=role, is_active=is_active, search=search)

    def get_user(self, principal: Principal, user_id: str) -> User:
        # el permiso se evalúa antes de consultar: no revela si el id existe
        authorize(principal, Resource.USER, Action.READ, user_id)
        return self._get_or_404(user_id)

    def create_user(self, principal: Principal, data: UserCreate) -> User:
        authorize(principal, Resource.USER, Action.CREATE)
        if self.users.find_by_email(data.email):
            raise ConflictError("User with this email already exists")

        user = self.users.create(
            email=data.email,
            password_hash=AuthService.get_password_hash(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            role=data.role,
            is_active=data.is_active,
        )
        logger.info("User %s created by %s", user.id, principal.id)
        return user

    def update_user(self, principal: Principal, user_id: str, data: UserUpdate) -> User:
        authorize(principal, Resource.USER, Action.UPDATE, user_id)
        user = self._get_or_404(user_id)

        update_data = strip_protected_user_fields(principal, data.model_dump(exclude_unset=True))

        if "email" in update_data and update_data["email"] != user.email:
            if self.users.find_by_email(update_data["email"]):
                raise ConflictError("User with this email already exists")

        # columnas no nulas: un null explícito se ignora
        update_data = {k: v for k, v in update_data.items() if v is not None}

        user = self.users.update(user, update_data)
        logger.info("User %s updated by %s (%s)", user.id, principal.id, ", ".join(update_data) or "no changes")
        return user

    def change_password(self, principal: Principal, user_id: str, data: ChangePasswordRequest) -> None:
        authorize(principal, Resource.USER, Action.CHANGE_PASSWORD, user_id)
        user = self._get_or_404(user_id)

        if requires_current_password(principal, user_id):
            if not data.current_password or not AuthService.verify_password(data.current_password, user.password_hash):
                raise ValidationError("Current password is incorrect")

        self.users.update(user, {"password_hash": AuthService.get_password_hash(data.new_password)})
        logger.info("Password changed for user %s by %s", user.id, principal.id)

    def delete_user(self, principal: Principal, user_id: str) -> None:
        authorize(principal, Resource.USER, Action.DELETE, user_id)
        user = self._get_or_404(user_id)

        if user.id == principal.id:
            raise ValidationError("You cannot delete your own account")

        self.users.delete(user)
        logger.info("User %s deleted by %s", user_id, principal.id)

    def toggle_user_status(self, principal: Principal, user_id: str) -> User:
        authorize(principal, Resource.USER, Action.CHANGE_STATUS, user_id)
        user = self._get_or_404(user_id)
        user = self.users.update(user, {"is_active": not user.is_active})
        logger.info("User %s is_active=%s (by %s)", user.id, user.is_active, principal.id)
        return user

    def _get_or_404(self, user_id: str) -> User:
        user = self.users.find_unique(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

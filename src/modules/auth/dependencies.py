from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from database import get_db
from modules.auth.principal import Principal
from modules.auth.services.auth_service import AuthService
from modules.auth.services.token_service import TokenKind, TokenService
from modules.common.errors import AuthenticationError, ForbiddenError
from modules.users.models.user import UserRole
from modules.users.repositories.user_repository import UserRepository

security = HTTPBearer(auto_error=False)


def get_token_service() -> TokenService:
    return TokenService()


def get_auth_service(
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(UserRepository(db), tokens)


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
    auth_service: AuthService = Depends(get_auth_service),
) -> Principal:
    """Dependency para obtener el usuario autenticado.

    Verifica el token de acceso y vuelve a cargar el usuario: si fue
    desactivado o borrado después de emitir el token, se rechaza.
    """
    if credentials is None:
        raise AuthenticationError("Access token required")
    claims = tokens.verify(credentials.credentials, TokenKind.ACCESS)
    user = auth_service.resolve_active_user(claims)
    return Principal.from_user(user)


def require_roles(*roles: UserRole):
    def dependency(principal: Principal = Depends(get_current_principal)):
        if principal.role not in roles:
            raise ForbiddenError("Insufficient permissions")
        return principal
    return dependency


require_admin = require_roles(UserRole.ADMIN)

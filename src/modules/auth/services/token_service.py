from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from config import settings
from modules.auth.principal import Principal
from modules.common.errors import InvalidTokenError
from modules.users.models.user import UserRole


class TokenKind(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


class TokenService:
    """Emite y verifica JWT de acceso y de refresco.

    Cada tipo se firma con su propio secreto y lleva su tipo en el claim
    ``type``: un token de acceso nunca valida como token de refresco.
    La verificación no consulta la base; quien llama debe revisar que el
    usuario siga activo.
    """

    def __init__(
        self,
        access_secret: str = settings.JWT_ACCESS_SECRET,
        refresh_secret: str = settings.JWT_REFRESH_SECRET,
        algorithm: str = settings.JWT_ALGORITHM,
        access_ttl: Optional[timedelta] = None,
        refresh_ttl: Optional[timedelta] = None,
    ):
        self.secrets = {TokenKind.ACCESS: access_secret, TokenKind.REFRESH: refresh_secret}
        self.algorithm = algorithm
        self.ttls = {
            TokenKind.ACCESS: access_ttl or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            TokenKind.REFRESH: refresh_ttl or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        }

    def issue_access_token(self, principal: Principal) -> str:
        return self._issue(principal, TokenKind.ACCESS)

    def issue_refresh_token(self, principal: Principal) -> str:
        return self._issue(principal, TokenKind.REFRESH)

    def verify(self, token: str, expected_kind: TokenKind) -> Principal:
        try:
            payload = jwt.decode(token, self.secrets[expected_kind], algorithms=[self.algorithm])
        except ExpiredSignatureError as exc:
            raise InvalidTokenError("Token expired") from exc
        except JWTError as exc:
            raise InvalidTokenError(f"Invalid {expected_kind.value} token") from exc

        if payload.get("type") != expected_kind.value:
            raise InvalidTokenError("Invalid token type")

        try:
            return Principal(id=payload["sub"], email=payload["email"], role=UserRole(payload["role"]))
        except (KeyError, ValueError) as exc:
            raise InvalidTokenError(f"Invalid {expected_kind.value} token") from exc

    def _issue(self, principal: Principal, kind: TokenKind) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": principal.id,
            "email": principal.email,
            "role": principal.role.value,
            "type": kind.value,
            "iat": now,
            "exp": now + self.ttls[kind],
        }
        return jwt.encode(claims, self.secrets[kind], algorithm=self.algorithm)

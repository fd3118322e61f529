import logging
from dataclasses import dataclass

from passlib.context import CryptContext

from config import settings
from modules.auth.principal import Principal
from modules.auth.services.token_service import TokenKind, TokenService
from modules.common.errors import AuthenticationError, ConflictError, NotFoundError
from modules.users.models.user import User, UserRole

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)


@dataclass
class AuthResult:
    user: User
    access_token: str
    refresh_token: str


class AuthService:

    def __init__(self, repository, token_service: TokenService):
        self.users = repository
        self.tokens = token_service

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verifica si la contraseña coincide con el hash"""
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def get_password_hash(password: str) -> str:
        """Genera hash de la contraseña"""
        return pwd_context.hash(password)

    def register(self, email: str, password: str, first_name: str, last_name: str) -> AuthResult:
        """Auto-registro: siempre crea un EMPLOYEE activo."""
        if self.users.find_by_email(email):
            raise ConflictError("User with this email already exists")

        user = self.users.create(
            email=email,
            password_hash=self.get_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            role=UserRole.EMPLOYEE,
            is_active=True,
        )
        logger.info("User %s registered", user.id)
        return self._issue_tokens(user)

    def login(self, email: str, password: str) -> AuthResult:
        user = self.users.find_by_email(email)
        if not user:
            raise AuthenticationError("Invalid email or password")
        if not user.is_active:
            raise AuthenticationError("Account is deactivated")
        if not self.verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        logger.info("User %s logged in", user.id)
        return self._issue_tokens(user)

    def refresh(self, refresh_token: str) -> str:
        """Valida un token de refresco y emite un nuevo token de acceso."""
        claims = self.tokens.verify(refresh_token, TokenKind.REFRESH)
        user = self.resolve_active_user(claims)
        return self.tokens.issue_access_token(Principal.from_user(user))

    def resolve_active_user(self, claims: Principal) -> User:
        """Los claims son una foto: el estado actual del usuario manda."""
        user = self.users.find_unique(claims.id)
        if user is None or not user.is_active:
            raise AuthenticationError("User not found or inactive")
        return user

    def get_profile(self, principal: Principal) -> User:
        user = self.users.find_unique(principal.id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _issue_tokens(self, user: User) -> AuthResult:
        principal = Principal.from_user(user)
        return AuthResult(
            user=user,
            access_token=self.tokens.issue_access_token(principal),
            refresh_token=self.tokens.issue_refresh_token(principal),
        )

from dataclasses import dataclass

from modules.users.models.user import User, UserRole


@dataclass(frozen=True)
class Principal:
    """Identity acting on a request: the only input the permission rules read about the caller."""

    id: str
    email: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(id=user.id, email=user.email, role=user.role)

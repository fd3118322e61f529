from typing import List, Optional

from sqlalchemy import or_

from modules.common.repository import SqlAlchemyRepository
from modules.users.models.user import User, UserRole


class UserRepository(SqlAlchemyRepository[User]):
    model = User

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def search(
        self,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> List[User]:
        criteria = []
        if role is not None:
            criteria.append(User.role == role)
        if is_active is not None:
            criteria.append(User.is_active == is_active)
        if search:
            pattern = f"%{search}%"
            criteria.append(or_(
                User.first_name.ilike(pattern),
                User.last_name.ilike(pattern),
                User.email.ilike(pattern),
            ))
        return self.find_many(*criteria, order_by=User.created_at.desc())

from .user import User, UserRole, new_id

__all__ = ['User', 'UserRole', 'new_id']

from .user_schemas import (
    UserCreate, UserUpdate, ChangePasswordRequest,
    UserSummary, UserResponse, UserListResponse
)

__all__ = [
    'UserCreate', 'UserUpdate', 'ChangePasswordRequest',
    'UserSummary', 'UserResponse', 'UserListResponse'
]

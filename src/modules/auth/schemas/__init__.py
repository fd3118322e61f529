from .auth_schemas import (
    RegisterRequest, LoginRequest, RefreshRequest,
    AccessTokenResponse, TokenResponse
)

__all__ = [
    'RegisterRequest', 'LoginRequest', 'RefreshRequest',
    'AccessTokenResponse', 'TokenResponse'
]

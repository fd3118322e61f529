from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Response, status

from config import settings
from modules.auth.dependencies import get_auth_service, get_current_principal
from modules.auth.principal import Principal
from modules.auth.schemas import (
    AccessTokenResponse, LoginRequest, RefreshRequest, RegisterRequest, TokenResponse
)
from modules.auth.services.auth_service import AuthResult, AuthService
from modules.common.errors import ValidationError
from modules.common.schemas import MessageResponse
from modules.users.schemas import UserResponse

router = APIRouter(prefix="/auth", tags=["authentication"])

REFRESH_COOKIE = "refresh_token"


def _set_refresh_cookie(response: Response, token: str):
    response.set_cookie(
        REFRESH_COOKIE,
        token,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
    )


def _token_response(response: Response, result: AuthResult) -> TokenResponse:
    _set_refresh_cookie(response, result.refresh_token)
    return TokenResponse(
        access_token=result.access_token,
        token_type="bearer",
        user=UserResponse.model_validate(result.user),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Auto-registro (crea un EMPLOYEE)"""
    result = auth_service.register(
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    return _token_response(response, result)


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Endpoint de login"""
    result = auth_service.login(payload.email, payload.password)
    return _token_response(response, result)


@router.post("/refresh", response_model=AccessTokenResponse)
def refresh(
    payload: Optional[RefreshRequest] = None,
    refresh_cookie: Optional[str] = Cookie(default=None, alias=REFRESH_COOKIE),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Nuevo token de acceso a partir del token de refresco (body o cookie)"""
    token = (payload.refresh_token if payload else None) or refresh_cookie
    if not token:
        raise ValidationError("Refresh token required")
    return AccessTokenResponse(access_token=auth_service.refresh(token))


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response):
    response.delete_cookie(REFRESH_COOKIE, httponly=True, secure=settings.is_production, samesite="strict")
    return MessageResponse(message="Logout successful")


@router.get("/me", response_model=UserResponse)
def get_current_user_info(
    principal: Principal = Depends(get_current_principal),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Obtener información del usuario actual"""
    return auth_service.get_profile(principal)

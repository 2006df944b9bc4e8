# foodorder/routers/auth.py
from typing import Any

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from foodorder.core.auth import TOKEN_COOKIE, get_token_claims
from foodorder.core.config import Settings, get_settings
from foodorder.core.security import (
    PasswordHasher,
    TokenService,
    get_password_hasher,
    get_token_service,
)
from foodorder.database import get_session
from foodorder.repositories.user_repo import UserRepository
from foodorder.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    TokenCheckResponse,
)
from foodorder.schemas.common import MessageResponse
from foodorder.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])

repo = UserRepository()


def get_auth_service(
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(repo, hasher, tokens)


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: RegisterRequest,
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
):
    """
    Create a customer account.

    Body: name, email, password, cf_password (confirmation).
    """
    service.register(session, payload)
    return MessageResponse(message="Registration successful!")


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    response: Response,
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    """
    Exchange email + password for an access token.

    The token is returned in the body and also set as an http-only
    `token` cookie.
    """
    token, user = service.login(session, payload)
    response.set_cookie(
        key=TOKEN_COOKIE,
        value=token,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=settings.JWT_EXPIRE_DAYS * 24 * 60 * 60,
    )
    return LoginResponse(token=token, user=user)


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response, settings: Settings = Depends(get_settings)):
    """Clear the auth cookie. Bearer tokens simply expire."""
    response.delete_cookie(
        TOKEN_COOKIE,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return MessageResponse(message="Logout successful")


@router.get("/verify", response_model=TokenCheckResponse)
def verify_token(claims: dict[str, Any] = Depends(get_token_claims)):
    """
    Check the caller's token (cookie or Bearer header).

    401 "Unauthorized access" when none is sent, 401 "Token expired"
    when it is invalid or past its expiry.
    """
    return TokenCheckResponse(user=claims)

# foodorder/schemas/auth.py
from typing import Any

from pydantic import BaseModel

from foodorder.schemas.common import CamelModel
from foodorder.schemas.user import UserRead


class RegisterRequest(BaseModel):
    """
    Sign-up form.

    Every field is optional at the schema level; AuthService.register
    reports what is missing or wrong with a single readable message.
    """

    name: str | None = None
    email: str | None = None
    password: str | None = None
    cf_password: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class LoginResponse(CamelModel):
    success: bool = True
    token: str
    user: UserRead


class TokenCheckResponse(BaseModel):
    success: bool = True
    message: str = "Token is valid"
    user: dict[str, Any]

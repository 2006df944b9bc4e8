# foodorder/core/auth.py
import uuid
from typing import Any

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from foodorder.core.errors import AuthError, ForbiddenError
from foodorder.core.security import TokenService, get_token_service
from foodorder.database import get_session
from foodorder.models.user import User

# Cookie set by the login endpoint
TOKEN_COOKIE = "token"

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so the cookie can be checked as a fallback.
bearer_scheme = HTTPBearer(auto_error=False)


def extract_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
) -> str | None:
    """
    Find the raw access token for a request.

    Priority:
      1. `token` cookie
      2. Authorization: Bearer <token>
    """
    token = request.cookies.get(TOKEN_COOKIE)
    if token:
        return token
    if credentials is not None:
        return credentials.credentials
    return None


def get_token_claims(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> dict[str, Any]:
    """
    Verified claims of the caller's token.

    Raises:
        AuthError: "Unauthorized access" if no token was sent,
                   "Token expired" if it fails verification.
    """
    token = extract_token(request, credentials)
    if not token:
        raise AuthError("Unauthorized access")
    return tokens.verify(token)


def require_auth(
    claims: dict[str, Any] = Depends(get_token_claims),
    session: Session = Depends(get_session),
) -> User:
    """
    Resolve the current user from a verified token.

    Flow:
      1. Read 'sub' (user id) from the claims.
      2. Convert it to UUID to match User.id type.
      3. Load the user; the account may have been deleted since login.

    Raises:
        AuthError(401): if 'sub' is malformed or the user no longer exists.
    """
    try:
        user_id = uuid.UUID(str(claims["sub"]))
    except ValueError:
        raise AuthError("Invalid token subject")

    user = session.get(User, user_id)
    if user is None:
        raise AuthError("User no longer exists")
    return user


def require_admin(user: User = Depends(require_auth)) -> User:
    """
    Enforce admin role.

    Returns:
        The authenticated admin User.

    Raises:
        ForbiddenError(403): if role is not admin.
    """
    if user.role != "admin":
        raise ForbiddenError("Admin access required")
    return user

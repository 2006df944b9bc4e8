# foodorder/core/security.py
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any

from jose import jwt, JWTError
from passlib.context import CryptContext

from foodorder.core.config import Settings, get_settings
from foodorder.core.errors import AuthError


class PasswordHasher:
    """
    argon2 hashing / verification for stored user passwords.
    """

    def __init__(self) -> None:
        self._context = CryptContext(schemes=["argon2"], deprecated="auto")

    def hash(self, plain_password: str) -> str:
        return str(self._context.hash(plain_password))

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Return True when the plaintext matches the stored hash."""
        try:
            return bool(self._context.verify(plain_password, hashed_password))
        except ValueError:
            # Unrecognised / corrupted hash in the database
            return False


class TokenService:
    """
    Issue and verify signed, time-bounded access tokens.

    Built from an explicit Settings object so that nothing in here reads
    the process environment.

    Claims:
      - sub: user id (string)
      - iat: issued-at
      - exp: expiry (iat + JWT_EXPIRE_DAYS)
    """

    def __init__(self, settings: Settings):
        self.secret = settings.JWT_SECRET
        self.algorithm = settings.JWT_ALG
        self.lifetime = timedelta(days=settings.JWT_EXPIRE_DAYS)

    def issue(self, subject: str, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": subject,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """
        Decode and verify a token (signature + exp).

        Returns:
            Decoded claims.

        Raises:
            AuthError: if the token is invalid or expired.
        """
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            raise AuthError("Token expired")

        if not claims.get("sub"):
            raise AuthError("Token expired")
        return claims


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(get_settings())

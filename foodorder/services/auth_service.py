# foodorder/services/auth_service.py
import logging
from datetime import datetime, timezone

from email_validator import EmailNotValidError, validate_email
from sqlmodel import Session

from foodorder.core.errors import AuthError, ValidationError, store_errors
from foodorder.core.security import PasswordHasher, TokenService
from foodorder.models.user import User
from foodorder.repositories.user_repo import UserRepository
from foodorder.schemas.auth import LoginRequest, RegisterRequest
from foodorder.schemas.user import UserRead
from foodorder.services.user_service import to_user_read

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def registration_error(payload: RegisterRequest) -> str | None:
    """
    First problem with a sign-up form, or None if it is acceptable.
    """
    if not (payload.name and payload.email and payload.password and payload.cf_password):
        return "Please fill in all fields."
    if not is_valid_email(payload.email):
        return "Invalid email."
    if len(payload.password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
    if payload.password != payload.cf_password:
        return "Passwords do not match."
    return None


def login_error(payload: LoginRequest) -> str | None:
    if not (payload.email and payload.password):
        return "Please fill in all fields."
    return None


def is_valid_email(email: str) -> bool:
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


class AuthService:
    """
    Registration and credential login.

    Logout and token checks need no database access and live in the
    router.
    """

    def __init__(
        self,
        repo: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ):
        self.repo = repo
        self.hasher = hasher
        self.tokens = tokens

    def register(self, session: Session, payload: RegisterRequest) -> User:
        """
        Create a customer account (role='user').

        Raises:
            ValidationError: invalid form or email already registered.
        """
        message = registration_error(payload)
        if message:
            raise ValidationError(message)

        email = payload.email.strip()
        if self.repo.get_by_email(session, email):
            raise ValidationError("Email already registered")

        user = User(
            name=payload.name.strip(),
            email=email,
            password=self.hasher.hash(payload.password),
            role="user",
        )
        with store_errors("Registration failed"):
            user = self.repo.create(session, user)

        logger.info(f"Registered user {user.id}")
        return user

    def login(self, session: Session, payload: LoginRequest) -> tuple[str, UserRead]:
        """
        Check credentials and issue an access token.

        Returns:
            (token, user profile without password)

        Raises:
            ValidationError: email or password missing.
            AuthError: unknown email or wrong password (same message for both).
        """
        message = login_error(payload)
        if message:
            raise ValidationError(message)

        user = self.repo.get_by_email(session, payload.email.strip())
        if user is None or not self.hasher.verify(payload.password, user.password):
            raise AuthError("Invalid email or password")

        user.last_login = datetime.now(timezone.utc)
        with store_errors("Server error during login"):
            user = self.repo.update(session, user)

        token = self.tokens.issue(str(user.id))
        logger.info(f"User {user.id} logged in")
        return token, to_user_read(user)

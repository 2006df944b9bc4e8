# foodorder/services/user_service.py
import logging
import uuid

from sqlmodel import Session

from foodorder.core.errors import (
    ForbiddenError,
    NotFoundError,
    ValidationError,
    store_errors,
)
from foodorder.models.user import User
from foodorder.repositories.user_repo import UserRepository
from foodorder.schemas.user import VALID_ROLES, StaffMember, UserRead, UserSummary

logger = logging.getLogger(__name__)


class UserService:
    """
    Admin operations on user accounts.

    Responsibilities:
      - enforce app rules (valid roles, no self role change)
      - orchestrate repository operations
      - map lookups that miss to NotFoundError
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def list_users(self, session: Session) -> list[UserSummary]:
        with store_errors("Error fetching users"):
            users = self.repo.list_all(session)
        return [
            UserSummary(id=u.id, name=u.name, email=u.email, role=u.role)
            for u in users
        ]

    def list_staff(self, session: Session) -> list[StaffMember]:
        """Staff directory: role='staff', sorted by name."""
        with store_errors("Failed to fetch staff members"):
            staff = self.repo.list_by_role(session, "staff")
        return [
            StaffMember(id=u.id, name=u.name, email=u.email, phone=u.phone)
            for u in staff
        ]

    def get_user(self, session: Session, user_id: uuid.UUID) -> User:
        """
        Raises:
            NotFoundError: if no such user.
        """
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def delete_user(self, session: Session, user_id: uuid.UUID) -> None:
        user = self.get_user(session, user_id)
        with store_errors("Error deleting user"):
            self.repo.delete(session, user)
        logger.info(f"Deleted user {user_id}")

    def update_role(
        self,
        session: Session,
        acting_user: User,
        user_id: uuid.UUID,
        role: str | None,
    ) -> UserRead:
        """
        Change another user's role.

        Checks, in order, all before anything is written:
          1. an admin may never change their own role (403), whatever
             value was requested
          2. role must be one of user | staff | admin (400)
          3. target user must exist (404)
        """
        if user_id == acting_user.id:
            raise ForbiddenError("Cannot modify your own role")

        if role not in VALID_ROLES:
            raise ValidationError("Invalid role specified")

        user = self.get_user(session, user_id)
        user.role = role
        with store_errors("Error updating user role"):
            user = self.repo.update(session, user)

        logger.info(f"User {user_id} role set to {role} by {acting_user.id}")
        return to_user_read(user)


def to_user_read(user: User) -> UserRead:
    return UserRead(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        phone=user.phone,
        last_login=user.last_login,
        created_at=user.created_at,
    )

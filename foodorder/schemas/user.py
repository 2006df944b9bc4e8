# foodorder/schemas/user.py
import uuid
from datetime import datetime

from foodorder.schemas.common import CamelModel

# Roles a stored account may hold.
VALID_ROLES: tuple[str, ...] = ("user", "staff", "admin")


class UserSummary(CamelModel):
    """Admin user listing row. Never carries the password hash."""

    id: uuid.UUID
    name: str
    email: str
    role: str


class UserRead(UserSummary):
    """Full profile returned after login / role change."""

    phone: str | None = None
    last_login: datetime | None = None
    created_at: datetime


class StaffMember(CamelModel):
    id: uuid.UUID
    name: str
    email: str
    phone: str | None = None


class UserRoleUpdate(CamelModel):
    """
    Admin-only role update payload.

    `role` is a plain string: the service validates it so an unknown
    value is reported as 400 rather than a schema error.
    """

    role: str | None = None


class UserListResponse(CamelModel):
    success: bool = True
    users: list[UserSummary]


class StaffListResponse(CamelModel):
    success: bool = True
    staff: list[StaffMember]


class UserRoleResponse(CamelModel):
    success: bool = True
    message: str
    user: UserRead

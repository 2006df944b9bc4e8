# foodorder/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Registered account.

    Role:
      - "user"  : customer placing orders
      - "staff" : kitchen / counter staff
      - "admin" : dashboard access, user and order administration

    `password` holds the argon2 hash only; response schemas never
    include it.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=100,
        description="Display name",
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Login email, unique",
    )

    phone: str | None = Field(
        default=None,
        description="Contact phone number (staff directory)",
    )

    password: str = Field(
        description="argon2 password hash",
    )

    # Application role
    role: str = Field(
        default="user",
        index=True,
        description="Application role: user | staff | admin",
    )

    last_login: datetime | None = Field(
        default=None,
        description="Last successful login (UTC)",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

"""User and project models."""

from enum import Enum

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.models.base import BaseEntity


class UserRole(str, Enum):
    """Role of a user in the application."""

    ADMIN = "admin"
    USER = "user"


class User(BaseEntity):
    """A registered user.

    Password hashes live only in the users table and are never part of
    this model.
    """

    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    role: UserRole = Field(default=UserRole.USER)
    is_active: bool = Field(default=True)
    project_ids: list[str] = Field(default_factory=list)
    has_limited_access: bool = Field(
        default=False,
        description="Restrict minute visibility to assigned projects",
    )

    @field_validator("project_ids", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    @property
    def is_admin(self) -> bool:
        """Check if user has the admin role."""
        return self.role == UserRole.ADMIN


class UserEmail(BaseModel):
    """Minimal id + email projection used for notification lookups."""

    id: str
    email: str | None = None


class Project(BaseEntity):
    """A named, colored grouping of users and minutes."""

    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    user_ids: list[str] = Field(default_factory=list)
    color: str | None = Field(default=None, description="Hex color, e.g. #22c55e")

    @field_validator("user_ids", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

"""Request/response schemas for auth endpoints. JSON keys are camelCase."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from filmoteca.models.user import User


class CamelModel(BaseModel):
    """Base for API payloads: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(CamelModel):
    """Credentials for login; ``username`` may also be the account email."""

    username: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=128)


class RegisterRequest(CamelModel):
    """New account (admin only). Required fields are checked by the endpoint."""

    username: str | None = None
    email: str | None = None
    password: str | None = None
    role: str = "editor"


class UserUpdateRequest(CamelModel):
    """Partial account change (admin only); omitted fields are left alone."""

    username: str | None = None
    email: str | None = None
    role: str | None = None
    is_active: bool | None = None
    password: str | None = None


class CurrentUser(CamelModel):
    """Authenticated user attached to the request. Never carries the password hash."""

    id: str
    username: str
    email: str
    role: str
    is_active: bool
    last_login_at: datetime | None = None


class UserProfile(CamelModel):
    """User profile as returned by login and verify."""

    id: str
    username: str
    email: str
    role: str
    last_login: datetime | None = None

    @classmethod
    def from_user(cls, user: User | CurrentUser) -> "UserProfile":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role,
            last_login=user.last_login_at,
        )


class UserListItem(CamelModel):
    """User entry for admin list (no password)."""

    id: str
    username: str
    email: str
    role: str
    is_active: bool
    last_login: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserListItem":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role,
            is_active=user.is_active,
            last_login=user.last_login_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class LoginResponse(CamelModel):
    success: bool = True
    message: str
    user: UserProfile
    token: str


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class VerifyResponse(CamelModel):
    success: bool = True
    user: UserProfile


class UserResponse(CamelModel):
    """Response for register and user update."""

    success: bool = True
    message: str
    user: UserListItem


class UsersListResponse(CamelModel):
    """Response for GET /users (admin only)."""

    success: bool = True
    users: list[UserListItem]

"""Session endpoints plus the auth dependencies (get_current_user, role gates)."""

import logging
from collections.abc import Collection
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from filmoteca.core.context import AppContext
from filmoteca.core.database import get_db
from filmoteca.core.errors import AuthError, Forbidden, Unauthenticated, ValidationError
from filmoteca.models.user import ROLE_ADMIN, ROLE_EDITOR
from filmoteca.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    UserListItem,
    UserProfile,
    UserResponse,
    UsersListResponse,
    UserUpdateRequest,
    VerifyResponse,
)
from filmoteca.services.users import PASSWORD_MIN_LEN, UserStore

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)

ADMIN_ONLY: frozenset[str] = frozenset({ROLE_ADMIN})
ADMIN_OR_EDITOR: frozenset[str] = frozenset({ROLE_ADMIN, ROLE_EDITOR})


def get_context(request: Request) -> AppContext:
    return request.app.state.ctx


def get_user_store(
    ctx: Annotated[AppContext, Depends(get_context)],
    db: Annotated[Session, Depends(get_db)],
) -> UserStore:
    return UserStore(db, bcrypt_rounds=ctx.settings.BCRYPT_ROUNDS)


def extract_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    cookie_name: str,
) -> str | None:
    """Token from the auth cookie, falling back to the Authorization: Bearer header."""
    token = request.cookies.get(cookie_name)
    if token:
        return token
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return None


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    ctx: Annotated[AppContext, Depends(get_context)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> CurrentUser:
    """
    Dependency: resolve the request's bearer token to an active user.
    Raises 401 when the token is missing, expired or invalid, or when the
    user no longer exists or has been deactivated.
    """
    token = extract_token(request, credentials, ctx.settings.AUTH_COOKIE_NAME)
    if token is None:
        raise Unauthenticated("access token required")
    payload = ctx.tokens.verify(token)
    user = store.find_by_id(payload["sub"])
    if user is None or not user.is_active:
        raise Unauthenticated("invalid or inactive user")
    request.state.user = user
    return user


def authorize(allowed_roles: Collection[str], user: CurrentUser | None) -> AuthError | None:
    """Return the error denying access, or None when user holds one of allowed_roles."""
    if user is None:
        return Unauthenticated("user not authenticated")
    if user.role not in allowed_roles:
        return Forbidden("insufficient permissions")
    return None


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require role 'admin'. Raises 403 otherwise."""
    if (denied := authorize(ADMIN_ONLY, current_user)) is not None:
        raise denied
    return current_user


def require_editor(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require role 'admin' or 'editor'. Raises 403 otherwise."""
    if (denied := authorize(ADMIN_OR_EDITOR, current_user)) is not None:
        raise denied
    return current_user


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    ctx: Annotated[AppContext, Depends(get_context)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> LoginResponse:
    """
    Authenticate with username (or email) and password.
    Sets an http-only ``token`` cookie and also returns the raw token for
    clients that prefer the Authorization: Bearer header.
    """
    if not body.username or not body.password:
        raise ValidationError("username and password are required")

    user = store.find_by_username_or_email(body.username)
    # Same message for unknown user and wrong password.
    if user is None or not store.verify_password(user, body.password):
        logger.info("Login failed for %r", body.username)
        raise Unauthenticated("invalid credentials")

    store.touch_last_login(user)
    token = ctx.tokens.issue(user.id)
    settings = ctx.settings
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    logger.info("User %s logged in", user.username)
    return LoginResponse(
        message="login successful",
        user=UserProfile.from_user(user),
        token=token,
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    ctx: Annotated[AppContext, Depends(get_context)],
) -> MessageResponse:
    """Clear the auth cookie. Stateless: outstanding tokens stay valid until they expire."""
    settings = ctx.settings
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    return MessageResponse(message="logout successful")


@router.get("/verify", response_model=VerifyResponse)
def verify(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> VerifyResponse:
    """Echo the authenticated user; clients call this to restore session state."""
    return VerifyResponse(user=UserProfile.from_user(current_user))


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> UserResponse:
    """Create a user (admin only)."""
    if not body.username or not body.email or not body.password:
        raise ValidationError("username, email and password are required")
    if len(body.password) < PASSWORD_MIN_LEN:
        raise ValidationError(
            f"password must be at least {PASSWORD_MIN_LEN} characters",
            errors={"password": f"password must be at least {PASSWORD_MIN_LEN} characters"},
        )
    user = store.create(
        username=body.username,
        email=body.email,
        password=body.password,
        role=body.role,
    )
    logger.info("User %s registered by %s", user.username, admin.username)
    return UserResponse(message="user created successfully", user=UserListItem.from_user(user))


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> UsersListResponse:
    """List all users, newest first (admin only)."""
    return UsersListResponse(users=[UserListItem.from_user(u) for u in store.list_users()])


@router.patch("/users/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    body: UserUpdateRequest,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> UserResponse:
    """
    Change a user's username, email, role, active flag or password (admin only).
    Deactivating a user rejects all of their tokens from the next request on.
    """
    user = store.update(
        user_id,
        username=body.username,
        email=body.email,
        role=body.role,
        is_active=body.is_active,
        password=body.password,
    )
    logger.info("User %s updated by %s", user.username, admin.username)
    return UserResponse(message="user updated successfully", user=UserListItem.from_user(user))

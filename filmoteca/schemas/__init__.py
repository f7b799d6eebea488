"""Pydantic request/response schemas."""

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
from filmoteca.schemas.filmografia import (
    Estadisticas,
    EstadisticasResponse,
    FilmografiaCreate,
    FilmografiaOut,
    FilmografiaResponse,
    FilmografiaUpdate,
)
from filmoteca.schemas.health import HealthResponse

__all__ = [
    "CurrentUser",
    "Estadisticas",
    "EstadisticasResponse",
    "FilmografiaCreate",
    "FilmografiaOut",
    "FilmografiaResponse",
    "FilmografiaUpdate",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "RegisterRequest",
    "UserListItem",
    "UserProfile",
    "UserResponse",
    "UsersListResponse",
    "UserUpdateRequest",
    "VerifyResponse",
]

"""SQLAlchemy ORM models."""

from filmoteca.models.base import Base
from filmoteca.models.filmografia import Filmografia
from filmoteca.models.user import User

__all__ = ["Base", "Filmografia", "User"]

"""Core app configuration, database, security and application context."""

from filmoteca.core.config import Settings, get_settings
from filmoteca.core.context import AppContext
from filmoteca.core.database import get_db

__all__ = ["AppContext", "Settings", "get_db", "get_settings"]

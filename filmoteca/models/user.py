"""ORM model for application users (auth and RBAC)."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String

from filmoteca.core.security import DEFAULT_BCRYPT_ROUNDS, hash_password
from filmoteca.models.base import Base, new_id, utcnow

ROLE_ADMIN = "admin"
ROLE_EDITOR = "editor"
ROLES: frozenset[str] = frozenset({ROLE_ADMIN, ROLE_EDITOR})


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    Hashing and timestamping are explicit: build new rows with ``User.new``
    and change them through ``set_password`` / ``touch``. Nothing is
    recomputed implicitly on flush.
    """

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    username = Column(String(30), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default=ROLE_EDITOR)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    @classmethod
    def new(
        cls,
        username: str,
        email: str,
        password: str,
        role: str = ROLE_EDITOR,
        rounds: int = DEFAULT_BCRYPT_ROUNDS,
    ) -> "User":
        now = utcnow()
        return cls(
            id=new_id(),
            username=username,
            email=email,
            password_hash=hash_password(password, rounds),
            role=role,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    def set_password(self, password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        """Replace the stored hash; the only place a password hash changes."""
        self.password_hash = hash_password(password, rounds)

    def touch(self, when: datetime | None = None) -> None:
        self.updated_at = when or utcnow()

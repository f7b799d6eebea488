"""Credential store: user persistence, password hashing and lookups."""

import logging
import re
from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from filmoteca.core.errors import ConflictError, NotFound, ValidationError
from filmoteca.core.security import BCRYPT_MAX_BYTES, DEFAULT_BCRYPT_ROUNDS, verify_password
from filmoteca.models.base import utcnow
from filmoteca.models.user import ROLE_EDITOR, ROLES, User
from filmoteca.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 30
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128
EMAIL_MAX_LEN = 255
# Each repetition starts with a literal separator, so matching stays linear.
EMAIL_PATTERN = re.compile(r"^[\w+-]+(\.[\w+-]+)*@[\w-]+(\.[\w-]+)*\.\w{2,}$")

# Columns callers may see; the hash never leaves the store.
PUBLIC_COLUMNS = (
    User.id,
    User.username,
    User.email,
    User.role,
    User.is_active,
    User.last_login_at,
)


def normalize_username(username: str) -> str:
    return username.strip()


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _username_error(username: str) -> str | None:
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        return f"username must be between {USERNAME_MIN_LEN} and {USERNAME_MAX_LEN} characters"
    return None


def _email_error(email: str) -> str | None:
    if not email or len(email) > EMAIL_MAX_LEN or not EMAIL_PATTERN.match(email):
        return "invalid email"
    return None


def _password_error(password: str) -> str | None:
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        return f"password must be between {PASSWORD_MIN_LEN} and {PASSWORD_MAX_LEN} characters"
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        return f"password must be at most {BCRYPT_MAX_BYTES} bytes"
    return None


def _role_error(role: str) -> str | None:
    if role not in ROLES:
        return f"role must be one of {sorted(ROLES)}"
    return None


class UserStore:
    """
    Persisted user accounts.

    Uniqueness of username and email is enforced by the database's unique
    indexes: writes are attempted directly and a constraint violation is
    reported as ConflictError, so two concurrent registrations cannot both win.
    """

    def __init__(self, db: Session, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds

    def create(
        self,
        username: str,
        email: str,
        password: str,
        role: str = ROLE_EDITOR,
    ) -> User:
        """Validate, hash and persist a new user. Raises ValidationError or ConflictError."""
        username = normalize_username(username)
        email = normalize_email(email)
        errors = {
            field: message
            for field, message in (
                ("username", _username_error(username)),
                ("email", _email_error(email)),
                ("password", _password_error(password)),
                ("role", _role_error(role)),
            )
            if message
        }
        if errors:
            raise ValidationError("invalid user data", errors=errors)

        user = User.new(username, email, password, role=role, rounds=self.bcrypt_rounds)
        self._commit(user)
        logger.info("Created user id=%s username=%s role=%s", user.id, user.username, user.role)
        return user

    def update(
        self,
        user_id: str,
        *,
        username: str | None = None,
        email: str | None = None,
        role: str | None = None,
        is_active: bool | None = None,
        password: str | None = None,
    ) -> User:
        """
        Apply the given changes and refresh updated_at. The password hash is
        recomputed only when a new plaintext password is supplied.
        """
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFound("user not found")

        errors: dict[str, str] = {}
        if username is not None:
            username = normalize_username(username)
            if message := _username_error(username):
                errors["username"] = message
        if email is not None:
            email = normalize_email(email)
            if message := _email_error(email):
                errors["email"] = message
        if role is not None and (message := _role_error(role)):
            errors["role"] = message
        if password is not None and (message := _password_error(password)):
            errors["password"] = message
        if errors:
            raise ValidationError("invalid user data", errors=errors)

        if username is not None:
            user.username = username
        if email is not None:
            user.email = email
        if role is not None:
            user.role = role
        if is_active is not None:
            user.is_active = is_active
        if password is not None:
            user.set_password(password, self.bcrypt_rounds)
        user.touch()
        self._commit(user)
        logger.info("Updated user id=%s", user.id)
        return user

    def verify_password(self, user: User, candidate: str) -> bool:
        """Constant-time comparison via bcrypt; False on mismatch or malformed hash."""
        return verify_password(candidate, user.password_hash)

    def touch_last_login(self, user: User, when: datetime | None = None) -> None:
        now = when or utcnow()
        user.last_login_at = now
        user.touch(now)
        self.db.add(user)
        self.db.commit()

    def find_by_username_or_email(self, identifier: str, active_only: bool = True) -> User | None:
        """Look up a full user row (hash included, for credential checks) by username or email."""
        identifier = identifier.strip()
        query = self.db.query(User).filter(
            or_(User.username == identifier, User.email == identifier.lower())
        )
        if active_only:
            query = query.filter(User.is_active.is_(True))
        return query.first()

    def find_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == normalize_username(username)).first()

    def find_by_id(self, user_id: str) -> CurrentUser | None:
        """Look up a user by id; the returned projection never includes the password hash."""
        row = self.db.query(*PUBLIC_COLUMNS).filter(User.id == user_id).first()
        if row is None:
            return None
        return CurrentUser(
            id=row.id,
            username=row.username,
            email=row.email,
            role=row.role,
            is_active=row.is_active,
            last_login_at=row.last_login_at,
        )

    def list_users(self) -> list[User]:
        """All users, newest-created first."""
        return self.db.query(User).order_by(User.created_at.desc()).all()

    def _commit(self, user: User) -> None:
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError() from e
        self.db.refresh(user)

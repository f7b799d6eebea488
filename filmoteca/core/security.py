"""Password hashing and JWT issuing/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from filmoteca.core.errors import TokenExpired, TokenInvalid

DEFAULT_BCRYPT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72

REQUIRED_CLAIMS = ("sub", "iat", "exp")


def hash_password(plain_password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage with a fresh salt. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Never raises on mismatch."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenService:
    """
    Issues and verifies signed, time-limited bearer tokens.

    Tokens carry the user id (``sub``), ``iat`` and ``exp``. No server-side
    record is kept: rotating the secret invalidates every outstanding token.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(hours=24)) -> None:
        if not secret:
            raise ValueError("token signing secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: str, now: datetime | None = None) -> str:
        """Create a token for user_id expiring ``ttl`` after ``now`` (defaults to current time)."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """
        Decode and validate a token; return its payload.
        Raises TokenExpired past ``exp`` and TokenInvalid for any other failure
        (bad signature, malformed payload, unexpected algorithm, missing claims).
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": list(REQUIRED_CLAIMS)},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpired() from e
        except jwt.PyJWTError as e:
            raise TokenInvalid() from e
        sub = payload.get("sub")
        if not isinstance(sub, str) or not sub.strip():
            raise TokenInvalid()
        return payload

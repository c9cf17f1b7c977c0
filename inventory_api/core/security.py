"""
Security: password hashing and JWT (best practices for APIs).
Challenge: Secure auth, no plain-text passwords, token validation.
Design: Hasher and issuer are objects built from Settings; the secret is injected, not global.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import PasswordSizeError

from inventory_api.core.exceptions import HashingError, InvalidTokenError, SigningError
from inventory_api.domain.models import SessionClaims

logger = logging.getLogger(__name__)

# Anything shorter cannot be a JWT; reject before parsing
MIN_TOKEN_LENGTH = 10


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PasswordHasher:
    """One-way bcrypt hashing. Slow on purpose (work factor)."""

    def __init__(self, rounds: int = 12):
        # truncate_error: bcrypt only uses 72 bytes; refuse instead of silently truncating
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
            bcrypt__truncate_error=True,
        )

    def hash(self, plaintext: str) -> str:
        """Salted hash for storage. Never store plain passwords."""
        try:
            return self._context.hash(plaintext)
        except (PasswordSizeError, ValueError, TypeError) as exc:
            raise HashingError(f"failed to hash password: {exc}") from exc

    def verify(self, hashed: str, plaintext: str) -> bool:
        """Constant-time comparison for login. Mismatch or malformed hash -> False."""
        try:
            return self._context.verify(plaintext, hashed)
        except (ValueError, TypeError):
            return False


class TokenIssuer:
    """Signs and validates session tokens. Algorithm is pinned; header `alg` is never trusted."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = utcnow,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    def issue(self, user_id: int, username: str) -> str:
        """Create JWT for authenticated user. Subject is the user id."""
        if not self._secret:
            raise SigningError("signing key is not configured")
        issued_at = self._clock()
        expires_at = issued_at + self._ttl
        to_encode: dict[str, Any] = {
            "sub": str(user_id),
            "user_id": user_id,
            "username": username,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        try:
            return jwt.encode(to_encode, self._secret, algorithm=self._algorithm)
        except JWTError as exc:
            raise SigningError(f"failed to sign token: {exc}") from exc

    def validate(self, token: str) -> SessionClaims:
        """Decode and verify JWT. Raises InvalidTokenError on any problem."""
        if not token or len(token) < MIN_TOKEN_LENGTH:
            raise InvalidTokenError()
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as exc:
            logger.debug("token rejected: %s", exc)
            raise InvalidTokenError() from exc

        try:
            claims = SessionClaims(
                user_id=int(payload["user_id"]),
                username=str(payload["username"]),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.debug("token rejected: malformed claims (%s)", exc)
            raise InvalidTokenError() from exc

        # Library checks exp against wall clock; also honour the injected clock
        if self._clock() > claims.expires_at:
            raise InvalidTokenError()
        return claims

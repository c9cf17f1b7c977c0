"""
Authentication service - registration, login, token validation.
Challenge: Never reveal whether the username or the password was wrong.
Design: Hasher, token issuer and user repository are injected; no globals, no env reads.
"""

import logging

from inventory_api.core.exceptions import (
    CorruptRecordError,
    InvalidCredentialsError,
    PasswordTooShortError,
    UserNotFoundError,
    UsernameRequiredError,
)
from inventory_api.core.security import PasswordHasher, TokenIssuer
from inventory_api.db.repositories.interfaces import UserRepository
from inventory_api.domain.models import SessionClaims, User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthService:
    def __init__(self, user_repo: UserRepository, hasher: PasswordHasher, tokens: TokenIssuer):
        self.user_repo = user_repo
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, username: str, password: str) -> User:
        """Validate, hash, persist. DuplicateUsernameError propagates unchanged."""
        if not username:
            raise UsernameRequiredError()
        if len(password) < MIN_PASSWORD_LENGTH:
            raise PasswordTooShortError()
        user = User(username=username, password_hash=self.hasher.hash(password))
        user = await self.user_repo.create(user)
        logger.info("user registered: %s (id=%s)", user.username, user.id)
        return user

    async def login(self, username: str, password: str) -> str:
        """Return a signed token. Every credential failure is the same InvalidCredentialsError."""
        if not username or not password:
            raise InvalidCredentialsError()
        try:
            user = await self.user_repo.find_by_username(username)
        except UserNotFoundError:
            logger.info("login failed for %r", username)
            raise InvalidCredentialsError() from None
        if not self.hasher.verify(user.password_hash, password):
            logger.info("login failed for %r", username)
            raise InvalidCredentialsError()
        if user.id <= 0:
            raise CorruptRecordError(f"user {username!r} has invalid id {user.id}")
        token = self.tokens.issue(user.id, user.username)
        logger.info("login succeeded for %r", username)
        return token

    def validate_token(self, token: str) -> SessionClaims:
        return self.tokens.validate(token)

    async def get_user(self, user_id: int) -> User:
        return await self.user_repo.find_by_id(user_id)

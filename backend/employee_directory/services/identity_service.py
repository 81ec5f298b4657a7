"""Identity Service — username/password registration and session token issuance.

Invariants:
    - Usernames unique (ConstraintViolationError on duplicates)
    - Login failures are indistinguishable to the caller ("Invalid credentials")
    - Issued tokens expire after settings.access_token_expire_minutes

Design Decisions:
    - Holds the AsyncSession directly (like the route-level handlers): a single
      table with no query logic does not warrant a store protocol
"""

import logging
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from employee_directory.config import Settings
from employee_directory.core.errors import (
    AuthenticationError, ConstraintViolationError, DirectoryValidationError,
)
from employee_directory.infrastructure.security import (
    create_access_token, hash_password, verify_password,
)
from employee_directory.models.user import User

logger = logging.getLogger(__name__)


class IdentityService:
    """Verifies identities and issues/validates session tokens."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def _find_user(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def register(self, username: str, password: str) -> None:
        username = username.strip()
        if not username or not password:
            raise DirectoryValidationError("Username and password are required")
        if await self._find_user(username):
            raise ConstraintViolationError("Username already exists", field="username")
        self.db.add(User(username=username, password_hash=hash_password(password)))
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConstraintViolationError("Username already exists", field="username") from e
        logger.info("User registered", extra={"username": username})

    async def login(self, username: str, password: str) -> str:
        user = await self._find_user(username.strip())
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Login rejected", extra={"username": username})
            raise AuthenticationError("Invalid credentials")
        return create_access_token(
            user.username,
            self.settings.secret_key,
            self.settings.token_algorithm,
            timedelta(minutes=self.settings.access_token_expire_minutes),
        )

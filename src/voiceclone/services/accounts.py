"""User accounts: signup, password login and bearer token resolution."""

import logging
from datetime import datetime, timedelta

import jwt
from jwt import InvalidTokenError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from voiceclone.api.settings import Settings, get_settings
from voiceclone.database import User
from voiceclone.errors import AuthenticationError, RegistrationClosedError, RegistrationError

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"
SIGNUP_ENVIRONMENTS = ("dev", "docker")


def create_access_token(
    user_id: str,
    settings: Settings | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Issue a signed token whose ``sub`` claim is the user id."""
    settings = settings or get_settings()
    expire = datetime.utcnow() + (
        expires_delta or timedelta(hours=settings.access_token_expire_hours)
    )
    return jwt.encode(
        {"sub": user_id, "exp": expire}, settings.jwt_secret_key, algorithm=TOKEN_ALGORITHM
    )


class AccountService:
    def __init__(self, db: AsyncSession, settings: Settings | None = None) -> None:
        self.db = db
        self.settings = settings or get_settings()

    async def _find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def register(self, email: str, password: str) -> User:
        if self.settings.env not in SIGNUP_ENVIRONMENTS:
            raise RegistrationClosedError()
        if await self._find_by_email(email) is not None:
            raise RegistrationError("Email already registered")

        user = User(email=email, hashed_password=User.hash_password(password))
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        logger.info(f"Registered user {user.id}")
        return user

    async def login(self, email: str, password: str) -> str:
        """Check a password and return a fresh access token."""
        user = await self._find_by_email(email)
        if user is None or not user.verify_password(password):
            logger.info(f"Failed login for {email}")
            raise AuthenticationError("Incorrect email or password")
        return create_access_token(user.id, self.settings)

    async def user_for_token(self, token: str) -> User:
        try:
            payload = jwt.decode(token, self.settings.jwt_secret_key, algorithms=[TOKEN_ALGORITHM])
        except InvalidTokenError as e:
            logger.info(f"Rejected bearer token: {e}")
            raise AuthenticationError() from e

        user_id = payload.get("sub")
        user = await self.db.get(User, user_id) if user_id else None
        if user is None:
            raise AuthenticationError()
        return user

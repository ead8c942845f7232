"""Bearer-token authentication for the project routes."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from sqlalchemy.ext.asyncio import AsyncSession

from voiceclone.api.settings import Settings, get_settings
from voiceclone.database import User, get_db
from voiceclone.errors import AuthenticationError, RegistrationClosedError, RegistrationError
from voiceclone.services.accounts import AccountService

security = HTTPBearer(auto_error=False)


class Credentials(BaseModel):
    """Email and password, used for both signup and login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    created_at: datetime


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


def get_account_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AccountService:
    return AccountService(db, settings)


def _unauthorized(e: AuthenticationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=e.message,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    accounts: AccountService = Depends(get_account_service),
) -> User:
    """Resolve the bearer token to a user or answer 401."""
    if credentials is None:
        raise _unauthorized(AuthenticationError())
    try:
        return await accounts.user_for_token(credentials.credentials)
    except AuthenticationError as e:
        raise _unauthorized(e) from e


router = APIRouter(prefix="/api/v1/auth", tags=["authentication"])


@router.post("/register", response_model=UserResponse)
async def register(
    credentials: Credentials, accounts: AccountService = Depends(get_account_service)
):
    try:
        user = await accounts.register(credentials.email, credentials.password)
    except RegistrationClosedError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message) from e
    except RegistrationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return UserResponse.model_validate(user)


@router.post("/login", response_model=Token)
async def login(credentials: Credentials, accounts: AccountService = Depends(get_account_service)):
    try:
        token = await accounts.login(credentials.email, credentials.password)
    except AuthenticationError as e:
        raise _unauthorized(e) from e
    return Token(access_token=token)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    return UserResponse.model_validate(current_user)

"""Authentication API routes.

Provides endpoints for user registration, login and current user info.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, EmailStr, Field

from ..deps import get_account_service, get_user_repository
from ..middleware.auth import CurrentUser, get_current_user
from ..middleware.rate_limit import RATE_LIMIT_LOGIN, RATE_LIMIT_REGISTER, limiter
from ...db.repositories.user_repository import User, UserRepository
from ...exceptions import UnauthorizedError
from ...services.account_service import AccountService
from ...services.auth_service import AuthService, get_auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


# Request/Response Models
class RegisterRequest(BaseModel):
    """Request model for user registration."""

    email: EmailStr
    name: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=6, description="Password must be at least 6 characters")


class LoginRequest(BaseModel):
    """Request model for user login."""

    email: EmailStr
    password: str = Field(min_length=1)


class UserResponse(BaseModel):
    """Public user information."""

    id: int
    email: str
    name: str
    created_at: str | None = None
    last_login: str | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(**user.to_dict())


class AuthResponse(BaseModel):
    """User plus a bearer token."""

    user: UserResponse
    token: str
    token_type: str = "bearer"
    expires_in: int


class MeResponse(BaseModel):
    user: UserResponse


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMIT_REGISTER)
async def register(
    request: Request,
    register_request: RegisterRequest,
    accounts: AccountService = Depends(get_account_service),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Register a new account and return it with an access token."""
    user, token = accounts.register(
        register_request.email,
        register_request.name,
        register_request.password,
    )
    return AuthResponse(
        user=UserResponse.from_user(user),
        token=token,
        expires_in=auth_service.expires_in,
    )


@router.post("/login", response_model=AuthResponse)
@limiter.limit(RATE_LIMIT_LOGIN)
async def login(
    request: Request,
    login_request: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Exchange email and password for an access token."""
    user, token = accounts.login(login_request.email, login_request.password)
    return AuthResponse(
        user=UserResponse.from_user(user),
        token=token,
        expires_in=auth_service.expires_in,
    )


@router.get("/me", response_model=MeResponse)
async def me(
    current_user: CurrentUser = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
) -> MeResponse:
    """Return the authenticated user."""
    user = users.get_by_id(current_user.user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return MeResponse(user=UserResponse.from_user(user))

"""Authentication dependency for FastAPI routes."""

from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...db.repositories.user_repository import UserRepository
from ...exceptions import UnauthorizedError
from ...services.auth_service import (
    AuthService,
    InvalidTokenError,
    TokenExpiredError,
    get_auth_service,
)
from ..deps import get_user_repository


# Security scheme for Bearer token authentication
security = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    """The authenticated caller.

    Attributes:
        user_id: Database id of the user.
        email: User's email address.
        name: User's display name.
    """

    user_id: int
    email: str
    name: str

    def to_dict(self) -> dict:
        return {"id": self.user_id, "email": self.email, "name": self.name}


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
    users: UserRepository = Depends(get_user_repository),
) -> CurrentUser:
    """FastAPI dependency to get the current authenticated user.

    Validates the bearer token and loads the user it names, so tokens for
    deleted accounts stop working immediately.

    Raises:
        UnauthorizedError: If no token is provided, the token is invalid or
            expired, or the user no longer exists.
    """
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    try:
        payload = auth_service.verify_access_token(credentials.credentials)
    except TokenExpiredError:
        raise UnauthorizedError("Token has expired")
    except InvalidTokenError as e:
        raise UnauthorizedError(str(e))

    user = users.get_by_id(int(payload["sub"]))
    if user is None:
        raise UnauthorizedError("User not found")

    current = CurrentUser(user_id=user.id, email=user.email, name=user.name)
    request.state.user = current
    return current

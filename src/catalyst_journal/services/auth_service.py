"""Login tokens and password hashes for workbook accounts.

A successful register or login hands the client one HS256 bearer token that
names the user by database id. Tokens are stateless and there is no refresh
flow, so a client logs in again once its token expires. Every protected
route reloads the user from the id, which is why ``verify_access_token``
insists on a numeric subject.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt

from ..config import get_settings

ACCESS_TOKEN_TYPE = "access"


class AuthServiceError(Exception):
    """A bearer token could not be accepted."""


class TokenExpiredError(AuthServiceError):
    pass


class InvalidTokenError(AuthServiceError):
    pass


class AuthService:
    """Issues and checks workbook bearer tokens; hashes passwords with bcrypt."""

    def __init__(self) -> None:
        settings = get_settings()
        self._secret_key = settings.jwt_secret_key
        self._algorithm = settings.jwt_algorithm
        self._access_token_expire_minutes = settings.access_token_expire_minutes

    @property
    def expires_in(self) -> int:
        """Lifetime of a new token in seconds, as reported to clients."""
        return self._access_token_expire_minutes * 60

    def create_access_token(
        self,
        user_id: int,
        email: str,
        extra_claims: dict[str, Any] | None = None,
    ) -> str:
        """Sign a token for ``user_id``.

        The id goes into ``sub`` as a string; ``extra_claims`` are merged last
        and can override the standard ones.
        """
        issued = datetime.now(timezone.utc)
        claims: dict[str, Any] = {
            "sub": str(user_id),
            "email": email,
            "iat": issued,
            "exp": issued + timedelta(minutes=self._access_token_expire_minutes),
            "type": ACCESS_TOKEN_TYPE,
        }
        if extra_claims:
            claims.update(extra_claims)
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify_access_token(self, token: str) -> dict[str, Any]:
        """Decode a bearer token and return its claims.

        Raises:
            TokenExpiredError: The token is past ``exp``.
            InvalidTokenError: Bad signature, not an access token, or a
                subject that is not a user id.
        """
        try:
            claims = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        if claims.get("type") != ACCESS_TOKEN_TYPE:
            raise InvalidTokenError(
                f"Expected token type '{ACCESS_TOKEN_TYPE}', got '{claims.get('type')}'"
            )
        if not str(claims.get("sub", "")).isdigit():
            raise InvalidTokenError("Invalid token: malformed subject")
        return claims

    @staticmethod
    def hash_password(password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

    @staticmethod
    def verify_password(password: str, hashed_password: str) -> bool:
        """Check a login password. A malformed stored hash counts as a mismatch."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
        except ValueError:
            return False


_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Shared AuthService, built on first use from the current settings."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service


def hash_password(password: str) -> str:
    return AuthService.hash_password(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return AuthService.verify_password(password, hashed_password)

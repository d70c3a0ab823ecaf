"""Registration and login."""

import logging

from ..db.repositories.user_repository import User, UserRepository
from ..exceptions import EmailAlreadyRegisteredError, InvalidCredentialsError, ValidationError
from .auth_service import AuthService, hash_password, verify_password

logger = logging.getLogger(__name__)


class AccountService:
    """Creates accounts and exchanges credentials for access tokens."""

    def __init__(self, users: UserRepository, auth: AuthService, min_password_length: int = 6):
        self._users = users
        self._auth = auth
        self._min_password_length = min_password_length

    def register(self, email: str, name: str, password: str) -> tuple[User, str]:
        """Create a user and return it with a fresh token.

        Raises:
            ValidationError: If name is blank or the password is too short.
            EmailAlreadyRegisteredError: If the email is taken.
        """
        if not name or not name.strip():
            raise ValidationError("Name is required", field="name")
        if len(password or "") < self._min_password_length:
            raise ValidationError(
                f"Password must be at least {self._min_password_length} characters",
                field="password",
            )
        if self._users.email_exists(email):
            raise EmailAlreadyRegisteredError(email.strip().lower())

        user = self._users.create_user(email, name, hash_password(password))
        logger.info(f"Registered user {user.id}")
        return user, self._auth.create_access_token(user.id, user.email)

    def login(self, email: str, password: str) -> tuple[User, str]:
        """Check credentials, stamp last_login and issue a token.

        Raises:
            InvalidCredentialsError: For an unknown email or wrong password.
        """
        user = self._users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()

        user = self._users.update_last_login(user.id)
        return user, self._auth.create_access_token(user.id, user.email)

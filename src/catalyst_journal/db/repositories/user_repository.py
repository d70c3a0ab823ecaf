"""SQLite-backed repository for user accounts."""

import sqlite3
from dataclasses import dataclass
from typing import Optional

from ...exceptions import EmailAlreadyRegisteredError
from ..database import JournalDatabase, utc_now


@dataclass
class User:
    """A registered workbook user."""

    id: int
    email: str
    name: str
    password_hash: str
    created_at: Optional[str] = None
    last_login: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "User":
        return cls(
            id=row["id"],
            email=row["email"],
            name=row["name"],
            password_hash=row["password_hash"],
            created_at=row["created_at"],
            last_login=row["last_login"],
        )

    def to_dict(self) -> dict:
        """Public representation; never includes the password hash."""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "created_at": self.created_at,
            "last_login": self.last_login,
        }


class UserRepository:
    """
    SQLite-backed repository for User entities.

    Emails are stored lower-cased so lookups are case-insensitive.
    """

    def __init__(self, db: JournalDatabase):
        self._db = db

    def create_user(self, email: str, name: str, password_hash: str) -> User:
        """
        Create a new user.

        Raises:
            EmailAlreadyRegisteredError: If the email already has an account.
        """
        email = email.strip().lower()
        try:
            with self._db._get_connection() as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO users (email, name, password_hash, created_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (email, name.strip(), password_hash, utc_now()),
                )
                user_id = cursor.lastrowid
        except sqlite3.IntegrityError:
            raise EmailAlreadyRegisteredError(email)

        return self.get_by_id(user_id)

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self._db._get_connection() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            return User.from_row(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with self._db._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM users WHERE email = ?", (email.strip().lower(),)
            ).fetchone()
            return User.from_row(row) if row else None

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def update_last_login(self, user_id: int) -> Optional[User]:
        """Stamp last_login and return the refreshed user."""
        with self._db._get_connection() as conn:
            conn.execute(
                "UPDATE users SET last_login = ? WHERE id = ?",
                (utc_now(), user_id),
            )
        return self.get_by_id(user_id)

"""SQLite-backed repository for per-user step progress."""

import sqlite3
from dataclasses import dataclass
from typing import Optional

from ..database import JournalDatabase, utc_now


NOT_STARTED = "not_started"
IN_PROGRESS = "in_progress"
COMPLETED = "completed"

STATUSES = (NOT_STARTED, IN_PROGRESS, COMPLETED)


@dataclass
class ProgressRecord:
    """Status of one step for one user."""

    user_id: int
    day_id: int
    step_id: int
    status: str = NOT_STARTED
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    last_updated: Optional[str] = None
    step_title: Optional[str] = None
    step_number: Optional[int] = None
    day_title: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "ProgressRecord":
        keys = row.keys()
        return cls(
            user_id=row["user_id"],
            day_id=row["day_id"],
            step_id=row["step_id"],
            status=row["status"],
            started_at=row["started_at"],
            completed_at=row["completed_at"],
            last_updated=row["last_updated"],
            step_title=row["step_title"] if "step_title" in keys else None,
            step_number=row["step_number"] if "step_number" in keys else None,
            day_title=row["day_title"] if "day_title" in keys else None,
        )

    def to_dict(self) -> dict:
        data = {
            "user_id": self.user_id,
            "day_id": self.day_id,
            "step_id": self.step_id,
            "status": self.status,
            "started_at": self.started_at,
            "completed_at": self.completed_at,
            "last_updated": self.last_updated,
        }
        if self.step_title is not None:
            data["step_title"] = self.step_title
            data["step_number"] = self.step_number
            data["day_title"] = self.day_title
        return data


_JOINED_SELECT = """
    SELECT p.*, s.title AS step_title, s.step_number AS step_number, d.title AS day_title
    FROM user_progress p
    JOIN training_steps s ON s.id = p.step_id
    JOIN training_days d ON d.id = p.day_id
"""


class ProgressRepository:
    """Persistence for the progress state machine.

    Transition rules live in ProgressService; this class only stores the
    result. ``started_at`` is written once and ``completed_at`` is refreshed
    on every entry into completed.
    """

    def __init__(self, db: JournalDatabase):
        self._db = db

    def get(self, user_id: int, step_id: int) -> Optional[ProgressRecord]:
        with self._db._get_connection() as conn:
            row = conn.execute(
                _JOINED_SELECT + " WHERE p.user_id = ? AND p.step_id = ?",
                (user_id, step_id),
            ).fetchone()
            return ProgressRecord.from_row(row) if row else None

    def find(self, user_id: int, day_id: Optional[int] = None) -> list[ProgressRecord]:
        query = _JOINED_SELECT + " WHERE p.user_id = ?"
        params: list = [user_id]
        if day_id is not None:
            query += " AND p.day_id = ?"
            params.append(day_id)
        query += " ORDER BY d.order_num, s.step_number"

        with self._db._get_connection() as conn:
            rows = conn.execute(query, params).fetchall()
            return [ProgressRecord.from_row(r) for r in rows]

    def save_status(self, user_id: int, day_id: int, step_id: int, status: str) -> ProgressRecord:
        """Create or update the record for (user, step)."""
        now = utc_now()
        started_at = now if status == IN_PROGRESS else None
        completed_at = now if status == COMPLETED else None

        with self._db._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO user_progress (
                    user_id, day_id, step_id, status, started_at, completed_at, last_updated
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(user_id, step_id) DO UPDATE SET
                    status = excluded.status,
                    started_at = COALESCE(user_progress.started_at, excluded.started_at),
                    completed_at = COALESCE(excluded.completed_at, user_progress.completed_at),
                    last_updated = excluded.last_updated
                """,
                (user_id, day_id, step_id, status, started_at, completed_at, now),
            )

        return self.get(user_id, step_id)

"""SQLite-backed repository for processes and their step checklists."""

import sqlite3
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from ..database import JournalDatabase, utc_now


PROCESS_STATUSES = ("active", "completed", "archived")
UPDATABLE_COLUMNS = ("title", "description", "status", "current_day", "current_step")


@dataclass
class Process:
    """A user's real-world run of the curriculum."""

    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    status: str = "active"
    current_day: int = 1
    current_step: int = 1
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    completed_at: Optional[str] = None
    total_steps: int = 0
    completed_steps: int = 0

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Process":
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            description=row["description"],
            status=row["status"],
            current_day=row["current_day"],
            current_step=row["current_step"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            completed_at=row["completed_at"],
            total_steps=row["total_steps"] or 0,
            completed_steps=row["completed_steps"] or 0,
        )

    @property
    def progress(self) -> int:
        """Completion percentage, rounded to the nearest integer."""
        if not self.total_steps:
            return 0
        return round(self.completed_steps / self.total_steps * 100)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "current_day": self.current_day,
            "current_step": self.current_step,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "completed_at": self.completed_at,
            "total_steps": self.total_steps,
            "completed_steps": self.completed_steps,
            "progress": self.progress,
        }


@dataclass
class ProcessStep:
    """Completion flag for one curriculum step inside a process."""

    process_id: int
    day_id: int
    step_id: int
    completed: bool = False
    completed_at: Optional[str] = None
    day_number: Optional[int] = None
    step_number: Optional[int] = None
    step_title: Optional[str] = None
    day_title: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "ProcessStep":
        return cls(
            process_id=row["process_id"],
            day_id=row["day_id"],
            step_id=row["step_id"],
            completed=bool(row["completed"]),
            completed_at=row["completed_at"],
            day_number=row["day_number"],
            step_number=row["step_number"],
            step_title=row["step_title"],
            day_title=row["day_title"],
        )

    def to_dict(self) -> dict:
        return {
            "process_id": self.process_id,
            "day_id": self.day_id,
            "step_id": self.step_id,
            "completed": self.completed,
            "completed_at": self.completed_at,
            "day_number": self.day_number,
            "step_number": self.step_number,
            "step_title": self.step_title,
            "day_title": self.day_title,
        }


_PROCESS_SELECT = """
    SELECT p.*,
        (SELECT COUNT(*) FROM process_steps ps WHERE ps.process_id = p.id) AS total_steps,
        (SELECT COUNT(*) FROM process_steps ps WHERE ps.process_id = p.id AND ps.completed = 1)
            AS completed_steps
    FROM processes p
"""

_STEP_SELECT = """
    SELECT ps.*, d.order_num AS day_number, s.step_number AS step_number,
        s.title AS step_title, d.title AS day_title
    FROM process_steps ps
    JOIN training_steps s ON s.id = ps.step_id
    JOIN training_days d ON d.id = ps.day_id
"""


class ProcessRepository:
    """CRUD for processes. Ownership checks belong to ProcessService."""

    def __init__(self, db: JournalDatabase):
        self._db = db

    def create(
        self,
        user_id: int,
        title: str,
        description: Optional[str],
        steps: Iterable[tuple[int, int]],
    ) -> int:
        """Insert a process and one incomplete step record per (day_id, step_id).

        Both happen in a single transaction.
        """
        now = utc_now()
        with self._db._get_connection() as conn:
            cursor = conn.execute(
                """
                INSERT INTO processes (
                    user_id, title, description, status, current_day, current_step,
                    created_at, updated_at
                ) VALUES (?, ?, ?, 'active', 1, 1, ?, ?)
                """,
                (user_id, title, description, now, now),
            )
            process_id = cursor.lastrowid
            conn.executemany(
                """
                INSERT INTO process_steps (process_id, day_id, step_id, completed)
                VALUES (?, ?, ?, 0)
                """,
                [(process_id, day_id, step_id) for day_id, step_id in steps],
            )
            return process_id

    def get(self, process_id: int) -> Optional[Process]:
        with self._db._get_connection() as conn:
            row = conn.execute(_PROCESS_SELECT + " WHERE p.id = ?", (process_id,)).fetchone()
            return Process.from_row(row) if row else None

    def find_for_user(self, user_id: int) -> list[Process]:
        with self._db._get_connection() as conn:
            rows = conn.execute(
                _PROCESS_SELECT + " WHERE p.user_id = ? ORDER BY p.updated_at DESC, p.id DESC",
                (user_id,),
            ).fetchall()
            return [Process.from_row(r) for r in rows]

    def get_steps(self, process_id: int) -> list[ProcessStep]:
        with self._db._get_connection() as conn:
            rows = conn.execute(
                _STEP_SELECT + " WHERE ps.process_id = ? ORDER BY d.order_num, s.step_number",
                (process_id,),
            ).fetchall()
            return [ProcessStep.from_row(r) for r in rows]

    def update(self, process_id: int, fields: dict[str, Any]) -> bool:
        """Apply a partial update; unknown keys are ignored."""
        updates = {k: v for k, v in fields.items() if k in UPDATABLE_COLUMNS}
        if fields.get("status") == "completed":
            updates["completed_at"] = utc_now()
        updates["updated_at"] = utc_now()

        set_clause = ", ".join(f"{column} = ?" for column in updates)
        with self._db._get_connection() as conn:
            cursor = conn.execute(
                f"UPDATE processes SET {set_clause} WHERE id = ?",
                [*updates.values(), process_id],
            )
            return cursor.rowcount > 0

    def touch(self, process_id: int) -> None:
        with self._db._get_connection() as conn:
            conn.execute(
                "UPDATE processes SET updated_at = ? WHERE id = ?",
                (utc_now(), process_id),
            )

    def delete(self, process_id: int) -> bool:
        """Delete a process; steps and responses go with it via ON DELETE CASCADE."""
        with self._db._get_connection() as conn:
            cursor = conn.execute("DELETE FROM processes WHERE id = ?", (process_id,))
            return cursor.rowcount > 0

    def complete_step(self, process_id: int, step_id: int) -> bool:
        now = utc_now()
        with self._db._get_connection() as conn:
            cursor = conn.execute(
                """
                UPDATE process_steps SET completed = 1, completed_at = ?
                WHERE process_id = ? AND step_id = ?
                """,
                (now, process_id, step_id),
            )
            if cursor.rowcount:
                conn.execute(
                    "UPDATE processes SET updated_at = ? WHERE id = ?",
                    (now, process_id),
                )
            return cursor.rowcount > 0

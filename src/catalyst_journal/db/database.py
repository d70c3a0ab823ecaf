"""SQLite database for users, curriculum, progress, responses and processes."""

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

from ..config import get_settings
from ..curriculum.definitions import CURRICULUM
from ..curriculum.fields import DayDefinition
from ..exceptions import DatabaseError
from .schema import SCHEMA

logger = logging.getLogger(__name__)


def utc_now() -> str:
    """Timestamp format used for every *_at column written by the app."""
    return datetime.now(timezone.utc).isoformat()


class JournalDatabase:
    """SQLite database manager for the training workbook."""

    def __init__(self, db_path: Optional[str] = None, curriculum: Iterable[DayDefinition] = CURRICULUM):
        """
        Initialize the database, creating tables and seeding the curriculum.

        Args:
            db_path: Path to SQLite database file. If not provided,
                     uses the configured CATALYST_DB_PATH or the default location.
            curriculum: Day definitions to seed into training_days/training_steps.
        """
        if db_path:
            self.db_path = Path(db_path)
        else:
            self.db_path = Path(get_settings().db_path)

        self._init_db(curriculum)

    def _init_db(self, curriculum: Iterable[DayDefinition]):
        """Initialize database tables and seed data."""
        with self._get_connection() as conn:
            conn.executescript(SCHEMA)
            self._seed_curriculum(conn, curriculum)

    @contextmanager
    def _get_connection(self):
        """Get database connection with context manager."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        except sqlite3.OperationalError as e:
            conn.rollback()
            logger.error(f"SQLite operation failed on {self.db_path}: {e}")
            raise DatabaseError("Database operation failed", operation=type(e).__name__) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _seed_curriculum(self, conn: sqlite3.Connection, curriculum: Iterable[DayDefinition]) -> None:
        """Insert or refresh the curriculum rows. Ids stay stable across runs."""
        steps_seeded = 0
        for day in curriculum:
            conn.execute(
                """
                INSERT INTO training_days (order_num, title, subtitle, description)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(order_num) DO UPDATE SET
                    title = excluded.title,
                    subtitle = excluded.subtitle,
                    description = excluded.description
                """,
                (day.number, day.title, day.subtitle, day.description),
            )
            day_id = conn.execute(
                "SELECT id FROM training_days WHERE order_num = ?", (day.number,)
            ).fetchone()["id"]

            for step in day.steps:
                conn.execute(
                    """
                    INSERT INTO training_steps (
                        day_id, step_number, title, description, tools,
                        importance, limitations, instructions
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(day_id, step_number) DO UPDATE SET
                        title = excluded.title,
                        description = excluded.description,
                        tools = excluded.tools,
                        importance = excluded.importance,
                        limitations = excluded.limitations,
                        instructions = excluded.instructions
                    """,
                    (
                        day_id,
                        step.step,
                        step.title,
                        step.description,
                        json.dumps(list(step.tools)),
                        step.importance or None,
                        step.limitations or None,
                        step.instructions or None,
                    ),
                )
                steps_seeded += 1
        logger.debug(f"Curriculum seeded: {steps_seeded} steps")

    # === Maintenance ===

    def get_stats(self) -> dict:
        """Row counts per table."""
        tables = [
            "users",
            "training_days",
            "training_steps",
            "user_progress",
            "user_responses",
            "processes",
            "process_steps",
            "process_responses",
        ]
        with self._get_connection() as conn:
            return {
                table: conn.execute(f"SELECT COUNT(*) AS n FROM {table}").fetchone()["n"]
                for table in tables
            }

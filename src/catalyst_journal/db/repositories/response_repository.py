"""Keyed storage of exercise answers.

Both response tables share one row shape and differ only in the owner
column, so every query is parameterised by a ``Scope``.
"""

import sqlite3
from dataclasses import dataclass
from typing import Optional

from ...models.scope import Scope, ScopeKind
from ..database import JournalDatabase, utc_now


_TABLES: dict[ScopeKind, tuple[str, str]] = {
    ScopeKind.TRAINING: ("user_responses", "user_id"),
    ScopeKind.PROCESS: ("process_responses", "process_id"),
}

_ORDER = "ORDER BY day_id, step_id, field_name"


@dataclass
class ResponseRecord:
    """One stored answer."""

    owner_id: int
    day_id: int
    step_id: int
    field_name: str
    field_value: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row, owner_column: str) -> "ResponseRecord":
        return cls(
            owner_id=row[owner_column],
            day_id=row["day_id"],
            step_id=row["step_id"],
            field_name=row["field_name"],
            field_value=row["field_value"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def to_dict(self) -> dict:
        return {
            "day_id": self.day_id,
            "step_id": self.step_id,
            "field_name": self.field_name,
            "field_value": self.field_value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class ResponseRepository:
    """Scope-parameterised CRUD over user_responses and process_responses."""

    def __init__(self, db: JournalDatabase):
        self._db = db

    @staticmethod
    def _table(scope: Scope) -> tuple[str, str]:
        return _TABLES[scope.kind]

    def upsert(self, scope: Scope, day_id: int, step_id: int, field_name: str, value: str) -> ResponseRecord:
        """Insert or replace the value stored under the composite key."""
        table, owner = self._table(scope)
        now = utc_now()
        with self._db._get_connection() as conn:
            conn.execute(
                f"""
                INSERT INTO {table} ({owner}, day_id, step_id, field_name, field_value, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT({owner}, day_id, step_id, field_name) DO UPDATE SET
                    field_value = excluded.field_value,
                    updated_at = excluded.updated_at
                """,
                (scope.owner_id, day_id, step_id, field_name, value, now, now),
            )
            row = conn.execute(
                f"""
                SELECT * FROM {table}
                WHERE {owner} = ? AND day_id = ? AND step_id = ? AND field_name = ?
                """,
                (scope.owner_id, day_id, step_id, field_name),
            ).fetchone()
            return ResponseRecord.from_row(row, owner)

    def get(self, scope: Scope, day_id: int, step_id: int, field_name: str) -> Optional[ResponseRecord]:
        table, owner = self._table(scope)
        with self._db._get_connection() as conn:
            row = conn.execute(
                f"""
                SELECT * FROM {table}
                WHERE {owner} = ? AND day_id = ? AND step_id = ? AND field_name = ?
                """,
                (scope.owner_id, day_id, step_id, field_name),
            ).fetchone()
            return ResponseRecord.from_row(row, owner) if row else None

    def get_value(self, scope: Scope, day_id: int, step_id: int, field_name: str) -> Optional[str]:
        record = self.get(scope, day_id, step_id, field_name)
        return record.field_value if record else None

    def find(
        self,
        scope: Scope,
        day_id: Optional[int] = None,
        step_id: Optional[int] = None,
    ) -> list[ResponseRecord]:
        """Records in the scope, optionally narrowed to a day and/or step."""
        table, owner = self._table(scope)
        query = f"SELECT * FROM {table} WHERE {owner} = ?"
        params: list = [scope.owner_id]
        if day_id is not None:
            query += " AND day_id = ?"
            params.append(day_id)
        if step_id is not None:
            query += " AND step_id = ?"
            params.append(step_id)
        query += f" {_ORDER}"

        with self._db._get_connection() as conn:
            rows = conn.execute(query, params).fetchall()
            return [ResponseRecord.from_row(r, owner) for r in rows]

    def delete(self, scope: Scope, day_id: int, step_id: int, field_name: str) -> bool:
        table, owner = self._table(scope)
        with self._db._get_connection() as conn:
            cursor = conn.execute(
                f"""
                DELETE FROM {table}
                WHERE {owner} = ? AND day_id = ? AND step_id = ? AND field_name = ?
                """,
                (scope.owner_id, day_id, step_id, field_name),
            )
            return cursor.rowcount > 0

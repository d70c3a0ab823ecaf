"""Read access to the seeded curriculum tables.

Days and steps are addressed by database id at the API, and by
(day number, step number) in the catalog. ``StepIndex`` maps between the two
so nothing ever assumes an id equals a number.
"""

import json
import sqlite3
from dataclasses import dataclass, field
from typing import Optional

from ..database import JournalDatabase


@dataclass
class TrainingDay:
    id: int
    order_num: int
    title: str
    subtitle: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "TrainingDay":
        return cls(
            id=row["id"],
            order_num=row["order_num"],
            title=row["title"],
            subtitle=row["subtitle"],
            description=row["description"],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "order_num": self.order_num,
            "title": self.title,
            "subtitle": self.subtitle,
            "description": self.description,
        }


@dataclass
class TrainingStep:
    id: int
    day_id: int
    day_number: int
    step_number: int
    title: str
    description: Optional[str] = None
    tools: list[str] = field(default_factory=list)
    importance: Optional[str] = None
    limitations: Optional[str] = None
    instructions: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "TrainingStep":
        return cls(
            id=row["id"],
            day_id=row["day_id"],
            day_number=row["day_number"],
            step_number=row["step_number"],
            title=row["title"],
            description=row["description"],
            tools=json.loads(row["tools"] or "[]"),
            importance=row["importance"],
            limitations=row["limitations"],
            instructions=row["instructions"],
        )

    @property
    def position(self) -> tuple[int, int]:
        return (self.day_number, self.step_number)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "day_id": self.day_id,
            "day_number": self.day_number,
            "step_number": self.step_number,
            "title": self.title,
            "description": self.description,
            "tools": list(self.tools),
            "importance": self.importance,
            "limitations": self.limitations,
            "instructions": self.instructions,
        }


class StepIndex:
    """Bidirectional lookup between step ids and curriculum positions."""

    def __init__(self, steps: list[TrainingStep]):
        self._by_id: dict[int, TrainingStep] = {s.id: s for s in steps}
        self._by_position: dict[tuple[int, int], TrainingStep] = {s.position: s for s in steps}
        self._day_numbers: dict[int, int] = {s.day_id: s.day_number for s in steps}
        self.steps: list[TrainingStep] = sorted(steps, key=lambda s: s.position)

    def get(self, step_id: int) -> Optional[TrainingStep]:
        return self._by_id.get(step_id)

    def at(self, day_number: int, step_number: int) -> Optional[TrainingStep]:
        return self._by_position.get((day_number, step_number))

    def day_number(self, day_id: int) -> Optional[int]:
        return self._day_numbers.get(day_id)

    def __len__(self) -> int:
        return len(self.steps)


_STEP_SELECT = """
    SELECT s.*, d.order_num AS day_number
    FROM training_steps s
    JOIN training_days d ON d.id = s.day_id
"""


class TrainingRepository:
    """Queries over training_days and training_steps."""

    def __init__(self, db: JournalDatabase):
        self._db = db
        self._index: Optional[StepIndex] = None

    def list_days(self) -> list[TrainingDay]:
        with self._db._get_connection() as conn:
            rows = conn.execute("SELECT * FROM training_days ORDER BY order_num").fetchall()
            return [TrainingDay.from_row(r) for r in rows]

    def get_day(self, day_id: int) -> Optional[TrainingDay]:
        with self._db._get_connection() as conn:
            row = conn.execute("SELECT * FROM training_days WHERE id = ?", (day_id,)).fetchone()
            return TrainingDay.from_row(row) if row else None

    def get_day_steps(self, day_id: int) -> list[TrainingStep]:
        with self._db._get_connection() as conn:
            rows = conn.execute(
                _STEP_SELECT + " WHERE s.day_id = ? ORDER BY s.step_number",
                (day_id,),
            ).fetchall()
            return [TrainingStep.from_row(r) for r in rows]

    def get_step(self, step_id: int) -> Optional[TrainingStep]:
        with self._db._get_connection() as conn:
            row = conn.execute(_STEP_SELECT + " WHERE s.id = ?", (step_id,)).fetchone()
            return TrainingStep.from_row(row) if row else None

    def list_steps(self) -> list[TrainingStep]:
        with self._db._get_connection() as conn:
            rows = conn.execute(
                _STEP_SELECT + " ORDER BY d.order_num, s.step_number"
            ).fetchall()
            return [TrainingStep.from_row(r) for r in rows]

    def step_index(self) -> StepIndex:
        """Index over all steps, built once per repository."""
        if self._index is None:
            self._index = StepIndex(self.list_steps())
        return self._index

"""Response store: validated, scope-aware writes and reads of answers.

Writes are row-level upserts keyed by (scope, day, step, field). Every
written name must be a field its step declares in the catalog, and numbers and
selects are checked against their declared range and options. Blank
values are never written, so re-submitting a form with an emptied field keeps
the last saved answer; ``clear_field`` is the explicit way to remove one.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from ..curriculum.catalog import Catalog, get_catalog
from ..curriculum.fields import FieldSpec
from ..db.repositories.response_repository import ResponseRecord, ResponseRepository
from ..db.repositories.training_repository import TrainingRepository
from ..exceptions import NotFoundError, StepNotFoundError, ValidationError
from ..models.scope import Scope

logger = logging.getLogger(__name__)


def is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


@dataclass
class ResponseEntry:
    """One answer to write."""

    day_id: int
    step_id: int
    field_name: str
    field_value: Any = None


@dataclass
class EntryResult:
    """Outcome of writing one entry in a batch."""

    day_id: int
    step_id: int
    field_name: str
    saved: bool = False
    skipped: bool = False
    error: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "day_id": self.day_id,
            "step_id": self.step_id,
            "field_name": self.field_name,
            "saved": self.saved,
            "skipped": self.skipped,
        }
        if self.error:
            data["error"] = self.error
        return data


class ResponseStore:
    """Durable keyed storage of answers for one scope at a time."""

    def __init__(
        self,
        responses: ResponseRepository,
        training: TrainingRepository,
        catalog: Optional[Catalog] = None,
    ):
        self._responses = responses
        self._training = training
        self._catalog = catalog if catalog is not None else get_catalog()

    def _check_key(self, day_id: int, step_id: int, field_name: str) -> FieldSpec:
        step = self._training.step_index().get(step_id)
        if step is None:
            raise StepNotFoundError(step_id)
        if step.day_id != day_id:
            raise ValidationError(
                f"Step {step_id} does not belong to day {day_id}",
                field="day_id",
            )
        if not field_name or not field_name.strip():
            raise ValidationError("field_name is required", field="field_name")

        definition = self._catalog.require(step.day_number, step.step_number)
        spec = definition.field_for(field_name)
        if spec is None:
            raise ValidationError(
                f"Step {step_id} has no field '{field_name}'",
                field="field_name",
            )
        return spec

    def upsert(
        self,
        scope: Scope,
        day_id: int,
        step_id: int,
        field_name: str,
        value: Any,
    ) -> Optional[ResponseRecord]:
        """Write one answer.

        Returns the stored record. For a blank value nothing is written and
        the existing record (possibly None) is returned.

        Raises:
            StepNotFoundError: Unknown step.
            ValidationError: The step is not in the day, the step has no such
                field, or the value is outside the field's range or options.
        """
        spec = self._check_key(day_id, step_id, field_name)
        if is_blank(value):
            return self._responses.get(scope, day_id, step_id, field_name)
        problem = spec.check(value)
        if problem:
            raise ValidationError(problem, field=field_name)
        return self._responses.upsert(scope, day_id, step_id, field_name, str(value))

    def upsert_many(self, scope: Scope, entries: Iterable[ResponseEntry]) -> list[EntryResult]:
        """Write entries one by one, each in its own transaction.

        The batch is not atomic. Invalid entries are reported in their own
        result and do not stop the rest of the batch.
        """
        results: list[EntryResult] = []
        for entry in entries:
            result = EntryResult(entry.day_id, entry.step_id, entry.field_name)
            if is_blank(entry.field_value):
                result.skipped = True
            else:
                try:
                    self.upsert(scope, entry.day_id, entry.step_id, entry.field_name, entry.field_value)
                    result.saved = True
                except (ValidationError, NotFoundError) as e:
                    logger.warning(f"Rejected response {entry.field_name!r} in {scope}: {e.message}")
                    result.error = e.message
            results.append(result)
        return results

    def get_all(self, scope: Scope) -> list[ResponseRecord]:
        return self._responses.find(scope)

    def get_by_day(self, scope: Scope, day_id: int) -> list[ResponseRecord]:
        return self._responses.find(scope, day_id=day_id)

    def get_by_step(self, scope: Scope, step_id: int) -> list[ResponseRecord]:
        return self._responses.find(scope, step_id=step_id)

    def get_value(self, scope: Scope, day_id: int, step_id: int, field_name: str) -> str:
        return self._responses.get_value(scope, day_id, step_id, field_name) or ""

    def clear_field(self, scope: Scope, day_id: int, step_id: int, field_name: str) -> bool:
        """Remove a stored answer. Returns whether one existed."""
        self._check_key(day_id, step_id, field_name)
        return self._responses.delete(scope, day_id, step_id, field_name)

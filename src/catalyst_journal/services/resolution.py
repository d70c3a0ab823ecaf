"""Progressive resolution of field values across steps and days.

The engine answers one question: what is stored under a field, either on the
current step or on another step addressed by curriculum position. It is a
single-hop, read-only lookup. Selector indirection and fallback chains are
composed by the caller (see StepFormService) out of repeated resolves.
"""

from typing import Optional

from ..curriculum.fields import SourceRef
from ..db.repositories.response_repository import ResponseRepository
from ..db.repositories.training_repository import TrainingRepository
from ..models.scope import Scope


class ResolutionEngine:
    """Read-only resolver over the response store."""

    def __init__(self, responses: ResponseRepository, training: TrainingRepository):
        self._responses = responses
        self._training = training

    def resolve(
        self,
        scope: Scope,
        day_id: int,
        step_id: int,
        field_name: str,
        source_day: Optional[int] = None,
        source_step: Optional[int] = None,
    ) -> str:
        """Return the stored value or ``""``.

        Args:
            scope: Namespace to read from.
            day_id: Id of the day the current step belongs to.
            step_id: Id of the current step.
            field_name: Field to look up.
            source_day: Day number to read from instead of the current day.
            source_step: Step number to read from instead of the current step.

        With neither source argument the lookup is on the current step. With
        either one, the (day number, step number) pair is mapped to concrete
        ids through the step index; an unknown position resolves to ``""``.
        """
        if source_day is None and source_step is None:
            target_day_id, target_step_id = day_id, step_id
        else:
            index = self._training.step_index()
            current = index.get(step_id)
            day_number = source_day
            if day_number is None:
                day_number = current.day_number if current else index.day_number(day_id)
            step_number = source_step
            if step_number is None and current is not None:
                step_number = current.step_number
            if day_number is None or step_number is None:
                return ""

            target = index.at(day_number, step_number)
            if target is None:
                return ""
            target_day_id, target_step_id = target.day_id, target.id

        value = self._responses.get_value(scope, target_day_id, target_step_id, field_name)
        return value or ""

    def resolve_ref(self, scope: Scope, day_id: int, step_id: int, source: SourceRef) -> str:
        """Resolve a catalog source reference relative to the current step."""
        return self.resolve(
            scope,
            day_id,
            step_id,
            source.field,
            source_day=source.day,
            source_step=source.step,
        )

"""Per-user step progress state machine and step submission."""

import logging
from typing import Any, Optional

from ..db.repositories.progress_repository import (
    COMPLETED,
    IN_PROGRESS,
    NOT_STARTED,
    STATUSES,
    ProgressRecord,
    ProgressRepository,
)
from ..db.repositories.training_repository import TrainingRepository, TrainingStep
from ..exceptions import InvalidTransitionError, StepNotFoundError, ValidationError
from ..models.scope import Scope
from .response_service import ResponseEntry, ResponseStore, is_blank
from .step_form_service import StepFormService

logger = logging.getLogger(__name__)


# None means no record exists yet. Nothing moves back to not_started once work began.
ALLOWED_TRANSITIONS: dict[Optional[str], frozenset[str]] = {
    None: frozenset(STATUSES),
    NOT_STARTED: frozenset(STATUSES),
    IN_PROGRESS: frozenset({IN_PROGRESS, COMPLETED}),
    COMPLETED: frozenset({IN_PROGRESS, COMPLETED}),
}

ACTIONS = {
    "save": IN_PROGRESS,
    "complete": COMPLETED,
}


class ProgressService:
    """Tracks not_started -> in_progress -> completed per (user, step)."""

    def __init__(
        self,
        progress: ProgressRepository,
        training: TrainingRepository,
        responses: ResponseStore,
        forms: StepFormService,
    ):
        self._progress = progress
        self._training = training
        self._responses = responses
        self._forms = forms

    def _step(self, step_id: int) -> TrainingStep:
        step = self._training.step_index().get(step_id)
        if step is None:
            raise StepNotFoundError(step_id)
        return step

    def missing_required(self, user_id: int, step_id: int) -> list[str]:
        """Required fields of the step with no stored answer. Prefills do not count."""
        form = self._forms.render(Scope.training(user_id), step_id)
        return [
            field["name"]
            for field in form["fields"]
            if field["required"] and (field["prefilled"] or is_blank(field["value"]))
        ]

    def list_progress(self, user_id: int, day_id: Optional[int] = None) -> list[ProgressRecord]:
        return self._progress.find(user_id, day_id=day_id)

    def get_status(self, user_id: int, step_id: int) -> str:
        record = self._progress.get(user_id, step_id)
        return record.status if record else NOT_STARTED

    def set_status(
        self,
        user_id: int,
        step_id: int,
        status: str,
        day_id: Optional[int] = None,
    ) -> ProgressRecord:
        """Move a step to ``status``.

        Raises:
            ValidationError: Unknown status or a day that does not own the step.
            InvalidTransitionError: The move is not allowed from the current status.
            StepNotFoundError: Unknown step.
        """
        if status not in STATUSES:
            raise ValidationError(
                f"Invalid status '{status}'. Must be one of: {', '.join(STATUSES)}",
                field="status",
            )
        step = self._step(step_id)
        if day_id is not None and day_id != step.day_id:
            raise ValidationError(
                f"Step {step_id} does not belong to day {day_id}",
                field="day_id",
            )

        current = self._progress.get(user_id, step_id)
        from_status = current.status if current else None
        if status not in ALLOWED_TRANSITIONS[from_status]:
            raise InvalidTransitionError(from_status or NOT_STARTED, status)

        record = self._progress.save_status(user_id, step.day_id, step.id, status)
        logger.debug(f"User {user_id} step {step_id}: {from_status} -> {status}")
        return record

    def submit(
        self,
        user_id: int,
        step_id: int,
        values: dict[str, Any],
        action: str = "save",
    ) -> dict[str, Any]:
        """Save non-blank answers for a step, then apply the save/complete action.

        Each answer is checked and stored on its own, so valid answers are kept
        even when others are rejected. Completing additionally needs every
        required field to hold an answer once the submission is stored.

        Raises:
            ValidationError: Unknown action, or ``complete`` with required
                fields still empty. The status is left unchanged.
            InvalidTransitionError: The action is not allowed from the current status.
        """
        if action not in ACTIONS:
            raise ValidationError(
                f"Invalid action '{action}'. Must be one of: {', '.join(ACTIONS)}",
                field="action",
            )
        step = self._step(step_id)
        # Check the transition before writing anything.
        from_status = self.get_status(user_id, step_id)
        if ACTIONS[action] not in ALLOWED_TRANSITIONS[from_status]:
            raise InvalidTransitionError(from_status, ACTIONS[action])

        entries = [
            ResponseEntry(step.day_id, step.id, name, value)
            for name, value in values.items()
        ]
        results = self._responses.upsert_many(Scope.training(user_id), entries)

        if action == "complete":
            missing = self.missing_required(user_id, step.id)
            if missing:
                raise ValidationError(
                    f"Required fields are empty: {', '.join(missing)}",
                    details={
                        "missing": missing,
                        "results": [r.to_dict() for r in results],
                    },
                )

        record = self.set_status(user_id, step.id, ACTIONS[action], day_id=step.day_id)

        return {
            "results": [r.to_dict() for r in results],
            "count": sum(1 for r in results if r.saved),
            "progress": record.to_dict(),
        }

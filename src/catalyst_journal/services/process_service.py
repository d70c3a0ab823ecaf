"""Process instance manager.

A process is a user-owned, isolated re-run of the curriculum. It reuses the
catalog and resolution engine but reads and writes its own response scope.
"""

import logging
from typing import Any, Optional

from ..curriculum.catalog import DAYS_IN_CURRICULUM, STEPS_PER_DAY
from ..db.repositories.process_repository import (
    PROCESS_STATUSES,
    Process,
    ProcessRepository,
    ProcessStep,
)
from ..db.repositories.response_repository import ResponseRecord
from ..db.repositories.training_repository import TrainingRepository
from ..exceptions import ProcessNotFoundError, StepNotFoundError, ValidationError
from ..models.scope import Scope
from .response_service import EntryResult, ResponseEntry, ResponseStore
from .step_form_service import StepFormService

logger = logging.getLogger(__name__)


def parse_response_key(key: str) -> tuple[int, int, str]:
    """Split a ``day-step-field`` key. Field names may themselves contain hyphens."""
    parts = key.split("-", 2)
    if len(parts) != 3 or not parts[0].isdigit() or not parts[1].isdigit() or not parts[2]:
        raise ValidationError(f"Malformed response key '{key}'", field="responses")
    return int(parts[0]), int(parts[1]), parts[2]


class ProcessService:
    """CRUD, responses and forms for processes, with ownership checks."""

    def __init__(
        self,
        processes: ProcessRepository,
        training: TrainingRepository,
        responses: ResponseStore,
        forms: StepFormService,
    ):
        self._processes = processes
        self._training = training
        self._responses = responses
        self._forms = forms

    def _owned(self, user_id: int, process_id: int) -> Process:
        process = self._processes.get(process_id)
        if process is None or process.user_id != user_id:
            raise ProcessNotFoundError(process_id)
        return process

    def create_process(self, user_id: int, title: str, description: Optional[str] = None) -> Process:
        """Create a process with one incomplete step record per curriculum step."""
        if not title or not title.strip():
            raise ValidationError("Title is required", field="title")

        steps = [(s.day_id, s.id) for s in self._training.step_index().steps]
        process_id = self._processes.create(user_id, title.strip(), description, steps)
        logger.info(f"User {user_id} created process {process_id} with {len(steps)} steps")
        return self._processes.get(process_id)

    def list_processes(self, user_id: int) -> list[Process]:
        return self._processes.find_for_user(user_id)

    def get_process(self, user_id: int, process_id: int) -> tuple[Process, list[ProcessStep]]:
        process = self._owned(user_id, process_id)
        return process, self._processes.get_steps(process_id)

    def update_process(self, user_id: int, process_id: int, changes: dict[str, Any]) -> Process:
        """Apply a partial update.

        ``None`` leaves a field unchanged, except for ``description`` where it
        clears the text.

        Raises:
            ValidationError: If nothing is given or a value is out of range.
        """
        self._owned(user_id, process_id)
        updates = {k: v for k, v in changes.items() if v is not None or k == "description"}
        if not updates:
            raise ValidationError("No fields to update")

        if "title" in updates and not str(updates["title"]).strip():
            raise ValidationError("Title cannot be empty", field="title")
        if "status" in updates and updates["status"] not in PROCESS_STATUSES:
            raise ValidationError(
                f"Invalid status '{updates['status']}'. Must be one of: {', '.join(PROCESS_STATUSES)}",
                field="status",
            )
        for position, highest in (("current_day", DAYS_IN_CURRICULUM), ("current_step", STEPS_PER_DAY)):
            if position in updates and not 1 <= int(updates[position]) <= highest:
                raise ValidationError(f"{position} must be between 1 and {highest}", field=position)

        self._processes.update(process_id, updates)
        return self._processes.get(process_id)

    def delete_process(self, user_id: int, process_id: int) -> None:
        self._owned(user_id, process_id)
        self._processes.delete(process_id)
        logger.info(f"User {user_id} deleted process {process_id}")

    def get_responses(self, user_id: int, process_id: int) -> list[ResponseRecord]:
        self._owned(user_id, process_id)
        return self._responses.get_all(Scope.process(process_id))

    def save_responses(self, user_id: int, process_id: int, responses: dict[str, Any]) -> list[EntryResult]:
        """Upsert ``{"day-step-field": value}`` pairs into the process scope."""
        self._owned(user_id, process_id)
        scope = Scope.process(process_id)

        results: list[EntryResult] = []
        for key, value in responses.items():
            try:
                day_id, step_id, field_name = parse_response_key(key)
            except ValidationError as e:
                results.append(EntryResult(0, 0, key, error=e.message))
                continue
            results.extend(
                self._responses.upsert_many(scope, [ResponseEntry(day_id, step_id, field_name, value)])
            )

        if any(r.saved for r in results):
            self._processes.touch(process_id)
        return results

    def complete_step(self, user_id: int, process_id: int, step_id: int) -> None:
        """Mark a step done. The process's current_day/current_step are left alone."""
        self._owned(user_id, process_id)
        if not self._processes.complete_step(process_id, step_id):
            raise StepNotFoundError(step_id)

    def get_step_form(self, user_id: int, process_id: int, step_id: int) -> dict[str, Any]:
        self._owned(user_id, process_id)
        return self._forms.render(Scope.process(process_id), step_id)

"""Denormalized export of a process for document generation."""

from collections import defaultdict
from typing import Any

from ..db.database import utc_now
from ..db.repositories.training_repository import TrainingRepository
from ..models.scope import Scope
from .process_service import ProcessService
from .response_service import ResponseStore


class ExportService:
    """Builds the process -> days -> steps -> responses document."""

    def __init__(self, processes: ProcessService, training: TrainingRepository, responses: ResponseStore):
        self._processes = processes
        self._training = training
        self._responses = responses

    def export_process(self, user_id: int, process_id: int) -> dict[str, Any]:
        process, process_steps = self._processes.get_process(user_id, process_id)
        completion = {ps.step_id: ps for ps in process_steps}

        answers: dict[int, dict[str, str]] = defaultdict(dict)
        for record in self._responses.get_all(Scope.process(process_id)):
            answers[record.step_id][record.field_name] = record.field_value

        days = []
        for day in self._training.list_days():
            steps = []
            for step in self._training.get_day_steps(day.id):
                status = completion.get(step.id)
                steps.append({
                    **step.to_dict(),
                    "completed": bool(status and status.completed),
                    "completed_at": status.completed_at if status else None,
                    "responses": answers.get(step.id, {}),
                })
            days.append({**day.to_dict(), "steps": steps})

        return {
            "process": process.to_dict(),
            "days": days,
            "exported_at": utc_now(),
        }

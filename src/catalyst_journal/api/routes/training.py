"""Curriculum API routes.

- GET  /training/days                    - All days in order
- GET  /training/days/{day_id}           - One day with its steps
- GET  /training/steps/{step_id}         - One step
- GET  /training/steps/{step_id}/form    - Rendered form in the caller's training scope
- POST /training/steps/{step_id}/submit  - Save answers and set progress
- GET  /training/tools                   - Tool reference cards
- GET  /training/tools/{name}            - One tool card
"""

from typing import Any, Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..deps import (
    get_progress_service,
    get_step_form_service,
    get_training_repository,
)
from ..middleware.auth import CurrentUser, get_current_user
from ...curriculum.tools import TOOL_LIBRARY, get_tool
from ...db.repositories.training_repository import TrainingRepository
from ...exceptions import DayNotFoundError, StepNotFoundError
from ...models.scope import Scope
from ...services.progress_service import ProgressService
from ...services.step_form_service import StepFormService

router = APIRouter(prefix="/training", tags=["training"])


class SubmitStepRequest(BaseModel):
    """Answers for one step plus what to do with its progress."""

    values: dict[str, Any] = Field(default_factory=dict)
    action: Literal["save", "complete"] = "save"


@router.get("/days")
async def list_days(
    current_user: CurrentUser = Depends(get_current_user),
    training: TrainingRepository = Depends(get_training_repository),
) -> dict:
    return {"days": [day.to_dict() for day in training.list_days()]}


@router.get("/days/{day_id}")
async def get_day(
    day_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    training: TrainingRepository = Depends(get_training_repository),
) -> dict:
    day = training.get_day(day_id)
    if day is None:
        raise DayNotFoundError(day_id)
    return {
        "day": day.to_dict(),
        "steps": [step.to_dict() for step in training.get_day_steps(day_id)],
    }


@router.get("/steps/{step_id}")
async def get_step(
    step_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    training: TrainingRepository = Depends(get_training_repository),
) -> dict:
    step = training.get_step(step_id)
    if step is None:
        raise StepNotFoundError(step_id)
    return {"step": step.to_dict()}


@router.get("/steps/{step_id}/form")
async def get_step_form(
    step_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    forms: StepFormService = Depends(get_step_form_service),
) -> dict:
    """Render the step form with the caller's own training answers."""
    return forms.render(Scope.training(current_user.user_id), step_id)


@router.post("/steps/{step_id}/submit")
async def submit_step(
    step_id: int,
    submit_request: SubmitStepRequest,
    current_user: CurrentUser = Depends(get_current_user),
    progress: ProgressService = Depends(get_progress_service),
) -> dict:
    """Save non-blank answers, then mark the step in progress or completed."""
    return progress.submit(
        current_user.user_id,
        step_id,
        submit_request.values,
        action=submit_request.action,
    )


@router.get("/tools")
async def list_tools(current_user: CurrentUser = Depends(get_current_user)) -> dict:
    return {"tools": {name: card.to_dict() for name, card in TOOL_LIBRARY.items()}}


@router.get("/tools/{name}")
async def get_tool_card(name: str, current_user: CurrentUser = Depends(get_current_user)) -> dict:
    return {"name": name, "tool": get_tool(name).to_dict()}

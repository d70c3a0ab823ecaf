"""Process API routes.

- GET    /processes                               - Caller's processes with progress
- POST   /processes                               - Create a process
- GET    /processes/{id}                          - Process plus its step records
- PUT    /processes/{id}                          - Partial update
- DELETE /processes/{id}                          - Delete with its steps and answers
- GET    /processes/{id}/responses                - Answers in the process scope
- POST   /processes/{id}/responses                - Save {"day-step-field": value} pairs
- GET    /processes/{id}/steps/{step_id}/form     - Step form in the process scope
- POST   /processes/{id}/steps/{step_id}/complete - Mark a step done

A process owned by someone else is reported as not found.
"""

import logging
from typing import Any, Literal, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from ..deps import get_process_service
from ..middleware.auth import CurrentUser, get_current_user
from ...services.process_service import ProcessService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/processes", tags=["processes"])


class CreateProcessRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None


class UpdateProcessRequest(BaseModel):
    """Partial update. Omitted fields are left as they are; a null description clears it."""

    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    status: Optional[Literal["active", "completed", "archived"]] = None
    current_day: Optional[int] = None
    current_step: Optional[int] = None


class SaveProcessResponsesRequest(BaseModel):
    responses: dict[str, Any] = Field(default_factory=dict)


@router.get("")
async def list_processes(
    current_user: CurrentUser = Depends(get_current_user),
    processes: ProcessService = Depends(get_process_service),
) -> dict:
    return {"processes": [p.to_dict() for p in processes.list_processes(current_user.user_id)]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_process(
    create_request: CreateProcessRequest,
    current_user: CurrentUser = Depends(get_current_user),
    processes: ProcessService = Depends(get_process_service),
) -> dict:
    process = processes.create_process(
        current_user.user_id,
        create_request.title,
        create_request.description,
    )
    return {
        "success": True,
        "processId": process.id,
        "message": "Process created",
    }


@router.get("/{process_id}")
async def get_process(
    process_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    processes: ProcessService = Depends(get_process_service),
) -> dict:
    process, steps = processes.get_process(current_user.user_id, process_id)
    return {
        "process": process.to_dict(),
        "steps": [s.to_dict() for s in steps],
    }


@router.put("/{process_id}")
async def update_process(
    process_id: int,
    update_request: UpdateProcessRequest,
    current_user: CurrentUser = Depends(get_current_user),
    processes: ProcessService = Depends(get_process_service),
) -> dict:
    process = processes.update_process(
        current_user.user_id,
        process_id,
        update_request.model_dump(exclude_unset=True),
    )
    return {"success": True, "process": process.to_dict()}


@router.delete("/{process_id}")
async def delete_process(
    process_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    processes: ProcessService = Depends(get_process_service),
) -> dict:
    processes.delete_process(current_user.user_id, process_id)
    return {"success": True}


@router.get("/{process_id}/responses")
async def get_process_responses(
    process_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    processes: ProcessService = Depends(get_process_service),
) -> dict:
    records = processes.get_responses(current_user.user_id, process_id)
    return {"responses": [r.to_dict() for r in records]}


@router.post("/{process_id}/responses")
async def save_process_responses(
    process_id: int,
    save_request: SaveProcessResponsesRequest,
    current_user: CurrentUser = Depends(get_current_user),
    processes: ProcessService = Depends(get_process_service),
) -> dict:
    results = processes.save_responses(current_user.user_id, process_id, save_request.responses)
    return {
        "success": True,
        "results": [r.to_dict() for r in results],
        "count": sum(1 for r in results if r.saved),
    }


@router.get("/{process_id}/steps/{step_id}/form")
async def get_process_step_form(
    process_id: int,
    step_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    processes: ProcessService = Depends(get_process_service),
) -> dict:
    return processes.get_step_form(current_user.user_id, process_id, step_id)


@router.post("/{process_id}/steps/{step_id}/complete")
async def complete_process_step(
    process_id: int,
    step_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    processes: ProcessService = Depends(get_process_service),
) -> dict:
    processes.complete_step(current_user.user_id, process_id, step_id)
    return {"success": True}

"""Progress API routes."""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..deps import get_progress_service
from ..middleware.auth import CurrentUser, get_current_user
from ...services.progress_service import ProgressService

router = APIRouter(prefix="/progress", tags=["progress"])


class UpdateProgressRequest(BaseModel):
    status: str
    day_id: Optional[int] = None


@router.get("")
async def list_progress(
    current_user: CurrentUser = Depends(get_current_user),
    progress: ProgressService = Depends(get_progress_service),
) -> dict:
    return {"progress": [r.to_dict() for r in progress.list_progress(current_user.user_id)]}


@router.get("/day/{day_id}")
async def list_day_progress(
    day_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    progress: ProgressService = Depends(get_progress_service),
) -> dict:
    records = progress.list_progress(current_user.user_id, day_id=day_id)
    return {"progress": [r.to_dict() for r in records]}


@router.post("/step/{step_id}")
async def update_step_progress(
    step_id: int,
    update: UpdateProgressRequest,
    current_user: CurrentUser = Depends(get_current_user),
    progress: ProgressService = Depends(get_progress_service),
) -> dict:
    """Move a step to a new status. Invalid statuses and transitions are 400."""
    record = progress.set_status(
        current_user.user_id,
        step_id,
        update.status,
        day_id=update.day_id,
    )
    return {"progress": record.to_dict()}

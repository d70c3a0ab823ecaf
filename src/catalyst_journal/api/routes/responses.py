"""Training-mode response API routes.

All reads and writes here use the caller's own training scope. Process
answers live under /processes/{id}/responses.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from ..deps import get_response_store
from ..middleware.auth import CurrentUser, get_current_user
from ...exceptions import ValidationError
from ...models.scope import Scope
from ...services.response_service import ResponseEntry, ResponseStore

router = APIRouter(prefix="/responses", tags=["responses"])


class ResponseItem(BaseModel):
    """One answer keyed by day, step and field."""

    day_id: int
    step_id: int
    field_name: str = Field(min_length=1)
    field_value: Any = None


class BatchResponsesRequest(BaseModel):
    responses: list[ResponseItem] = Field(default_factory=list)


@router.get("")
async def list_responses(
    current_user: CurrentUser = Depends(get_current_user),
    store: ResponseStore = Depends(get_response_store),
) -> dict:
    records = store.get_all(Scope.training(current_user.user_id))
    return {"responses": [r.to_dict() for r in records]}


@router.get("/day/{day_id}")
async def list_day_responses(
    day_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    store: ResponseStore = Depends(get_response_store),
) -> dict:
    records = store.get_by_day(Scope.training(current_user.user_id), day_id)
    return {"responses": [r.to_dict() for r in records]}


@router.get("/step/{step_id}")
async def list_step_responses(
    step_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    store: ResponseStore = Depends(get_response_store),
) -> dict:
    records = store.get_by_step(Scope.training(current_user.user_id), step_id)
    return {"responses": [r.to_dict() for r in records]}


@router.post("")
async def save_response(
    item: ResponseItem,
    current_user: CurrentUser = Depends(get_current_user),
    store: ResponseStore = Depends(get_response_store),
) -> dict:
    """Save one answer. A blank value leaves any stored answer untouched."""
    record = store.upsert(
        Scope.training(current_user.user_id),
        item.day_id,
        item.step_id,
        item.field_name,
        item.field_value,
    )
    return {"response": record.to_dict() if record else None}


@router.post("/batch")
async def save_responses_batch(
    batch: BatchResponsesRequest,
    current_user: CurrentUser = Depends(get_current_user),
    store: ResponseStore = Depends(get_response_store),
) -> dict:
    """Save many answers. Each entry reports saved, skipped or its error."""
    if not batch.responses:
        raise ValidationError("responses must be a non-empty list", field="responses")

    entries = [
        ResponseEntry(r.day_id, r.step_id, r.field_name, r.field_value)
        for r in batch.responses
    ]
    results = store.upsert_many(Scope.training(current_user.user_id), entries)
    return {
        "results": [r.to_dict() for r in results],
        "count": sum(1 for r in results if r.saved),
    }


@router.delete("/step/{step_id}/fields/{field_name}")
async def clear_response(
    step_id: int,
    field_name: str,
    day_id: int = Query(...),
    current_user: CurrentUser = Depends(get_current_user),
    store: ResponseStore = Depends(get_response_store),
) -> dict:
    cleared = store.clear_field(Scope.training(current_user.user_id), day_id, step_id, field_name)
    return {"cleared": cleared}

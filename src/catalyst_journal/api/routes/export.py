"""Export API routes."""

from fastapi import APIRouter, Depends

from ..deps import get_export_service
from ..middleware.auth import CurrentUser, get_current_user
from ...services.export_service import ExportService

router = APIRouter(prefix="/export", tags=["export"])


@router.get("/process/{process_id}")
async def export_process(
    process_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    exporter: ExportService = Depends(get_export_service),
) -> dict:
    """Return a process with every day, step and answer in one document."""
    return exporter.export_process(current_user.user_id, process_id)

"""Dashboard router - aggregates derived at read time."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from askiep.core.deps import get_db, get_owner_key
from askiep.schemas.dashboard import DashboardStats
from askiep.services import (
    compliance_service,
    metrics_service,
    profile_service,
    progress_service,
)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/{child_id}", response_model=DashboardStats)
def get_dashboard_stats(
    child_id: UUID,
    owner_key: str = Depends(get_owner_key),
    db: Session = Depends(get_db),
):
    """Compliance rate, mastery index and their breakdowns for one child."""
    profile_service.require_child(db, owner_key, child_id)
    stats = metrics_service.build_dashboard(
        compliance_service.list_logs(db, child_id),
        progress_service.list_progress(db, child_id),
    )
    return DashboardStats(child_id=child_id, **stats)

"""Goal progress router."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from askiep.core.deps import get_db, get_owner_key
from askiep.schemas.progress import GoalProgressCreate, GoalProgressRead
from askiep.services import profile_service, progress_service

router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("/{child_id}", response_model=list[GoalProgressRead])
def list_goal_progress(
    child_id: UUID,
    owner_key: str = Depends(get_owner_key),
    db: Session = Depends(get_db),
):
    if not profile_service.get_child(db, owner_key, child_id):
        return []
    return progress_service.list_progress(db, child_id)


@router.post("", response_model=GoalProgressRead, status_code=201)
def add_goal_progress(
    data: GoalProgressCreate,
    owner_key: str = Depends(get_owner_key),
    db: Session = Depends(get_db),
):
    profile_service.require_child(db, owner_key, data.child_id)
    return progress_service.create_progress(db, data)

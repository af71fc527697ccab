"""Behavior log router."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from askiep.core.deps import get_db, get_owner_key
from askiep.schemas.behavior import BehaviorLogCreate, BehaviorLogRead
from askiep.services import behavior_service, profile_service

router = APIRouter(prefix="/behavior", tags=["behavior"])


@router.get("/{child_id}", response_model=list[BehaviorLogRead])
def list_behavior_logs(
    child_id: UUID,
    owner_key: str = Depends(get_owner_key),
    db: Session = Depends(get_db),
):
    if not profile_service.get_child(db, owner_key, child_id):
        return []
    return behavior_service.list_behavior_logs(db, child_id)


@router.post("", response_model=BehaviorLogRead, status_code=201)
def add_behavior_log(
    data: BehaviorLogCreate,
    owner_key: str = Depends(get_owner_key),
    db: Session = Depends(get_db),
):
    profile_service.require_child(db, owner_key, data.child_id)
    return behavior_service.create_behavior_log(db, data)

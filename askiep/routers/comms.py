"""Communication log router."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from askiep.core.deps import get_db, get_owner_key
from askiep.schemas.comm import CommLogCreate, CommLogRead
from askiep.services import comm_service, profile_service

router = APIRouter(prefix="/comms", tags=["comms"])


@router.get("/{child_id}", response_model=list[CommLogRead])
def list_comm_logs(
    child_id: UUID,
    owner_key: str = Depends(get_owner_key),
    db: Session = Depends(get_db),
):
    if not profile_service.get_child(db, owner_key, child_id):
        return []
    return comm_service.list_comm_logs(db, child_id)


@router.post("", response_model=CommLogRead, status_code=201)
def add_comm_log(
    data: CommLogCreate,
    owner_key: str = Depends(get_owner_key),
    db: Session = Depends(get_db),
):
    profile_service.require_child(db, owner_key, data.child_id)
    return comm_service.create_comm_log(db, data)

"""Compliance router - service delivery logs."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from askiep.core.deps import get_db, get_owner_key
from askiep.schemas.compliance import ComplianceLogCreate, ComplianceLogRead
from askiep.services import compliance_service, profile_service

router = APIRouter(prefix="/compliance", tags=["compliance"])


@router.get("/{child_id}", response_model=list[ComplianceLogRead])
def list_compliance_logs(
    child_id: UUID,
    owner_key: str = Depends(get_owner_key),
    db: Session = Depends(get_db),
):
    if not profile_service.get_child(db, owner_key, child_id):
        return []
    return compliance_service.list_logs(db, child_id)


@router.post("", response_model=ComplianceLogRead, status_code=201)
def add_compliance_log(
    data: ComplianceLogCreate,
    owner_key: str = Depends(get_owner_key),
    db: Session = Depends(get_db),
):
    profile_service.require_child(db, owner_key, data.child_id)
    return compliance_service.create_log(db, data)

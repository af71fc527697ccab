"""Compliance service - service-delivery logs."""

from uuid import UUID

from sqlalchemy.orm import Session

from askiep.db.models import ComplianceLog
from askiep.schemas.compliance import ComplianceLogCreate


def list_logs(db: Session, child_id: UUID) -> list[ComplianceLog]:
    """List compliance logs for a child, newest service date first."""
    return db.query(ComplianceLog).filter(
        ComplianceLog.child_id == child_id,
    ).order_by(ComplianceLog.date.desc(), ComplianceLog.created_at.desc()).all()


def create_log(db: Session, data: ComplianceLogCreate) -> ComplianceLog:
    log = ComplianceLog(
        child_id=data.child_id,
        date=data.date,
        service_type=data.service_type,
        status=data.status.value,
        notes=data.notes,
    )
    db.add(log)
    db.commit()
    db.refresh(log)
    return log

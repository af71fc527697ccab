"""Communication log service."""

from uuid import UUID

from sqlalchemy.orm import Session

from askiep.db.models import CommLogEntry
from askiep.schemas.comm import CommLogCreate


def list_comm_logs(db: Session, child_id: UUID) -> list[CommLogEntry]:
    return db.query(CommLogEntry).filter(
        CommLogEntry.child_id == child_id,
    ).order_by(CommLogEntry.date.desc(), CommLogEntry.created_at.desc()).all()


def create_comm_log(db: Session, data: CommLogCreate) -> CommLogEntry:
    entry = CommLogEntry(
        child_id=data.child_id,
        date=data.date,
        contact_name=data.contact_name.strip(),
        method=data.method.value,
        summary=data.summary,
        follow_up_needed=data.follow_up_needed,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry

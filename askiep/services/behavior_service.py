"""Behavior (ABC) log service."""

from uuid import UUID

from sqlalchemy.orm import Session

from askiep.db.models import BehaviorLog
from askiep.schemas.behavior import BehaviorLogCreate


def list_behavior_logs(db: Session, child_id: UUID) -> list[BehaviorLog]:
    return db.query(BehaviorLog).filter(
        BehaviorLog.child_id == child_id,
    ).order_by(BehaviorLog.date.desc(), BehaviorLog.created_at.desc()).all()


def create_behavior_log(db: Session, data: BehaviorLogCreate) -> BehaviorLog:
    log = BehaviorLog(**data.model_dump())
    db.add(log)
    db.commit()
    db.refresh(log)
    return log

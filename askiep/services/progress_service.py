"""Goal progress service."""

from uuid import UUID

from sqlalchemy.orm import Session

from askiep.db.models import GoalProgress
from askiep.schemas.progress import GoalProgressCreate


def list_progress(db: Session, child_id: UUID) -> list[GoalProgress]:
    """List goal measurements for a child, newest first."""
    return db.query(GoalProgress).filter(
        GoalProgress.child_id == child_id,
    ).order_by(GoalProgress.last_updated.desc()).all()


def create_progress(db: Session, data: GoalProgressCreate) -> GoalProgress:
    entry = GoalProgress(
        child_id=data.child_id,
        goal_name=data.goal_name.strip(),
        current_value=data.current_value,
        target_value=data.target_value,
        status=data.status.value,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry

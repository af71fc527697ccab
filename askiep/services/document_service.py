"""Document service - append-only IEP source text."""

from uuid import UUID

from sqlalchemy.orm import Session

from askiep.db.models import IepDocument


def list_documents(db: Session, child_id: UUID) -> list[IepDocument]:
    """List documents for a child, newest first."""
    return db.query(IepDocument).filter(
        IepDocument.child_id == child_id,
    ).order_by(IepDocument.created_at.desc()).all()


def build_document(
    child_id: UUID,
    content: str,
    filename: str | None = None,
    analysis_id: UUID | None = None,
) -> IepDocument:
    """Build an unsaved document row; the caller owns the commit."""
    return IepDocument(
        child_id=child_id,
        filename=(filename or "").strip() or "Pasted IEP Text",
        content=content,
        analysis_id=analysis_id,
    )

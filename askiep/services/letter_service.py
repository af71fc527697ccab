"""Letter draft service - the only log-like record that updates in place."""

from uuid import UUID

from sqlalchemy.orm import Session

from askiep.core.errors import NotFoundError
from askiep.db.models import LetterDraft
from askiep.schemas.letter import LetterSave


def list_letters(db: Session, child_id: UUID) -> list[LetterDraft]:
    """List drafts for a child, most recently edited first."""
    return db.query(LetterDraft).filter(
        LetterDraft.child_id == child_id,
    ).order_by(LetterDraft.last_edited.desc()).all()


def save_letter(db: Session, data: LetterSave) -> tuple[LetterDraft, bool]:
    """Append a new draft, or overwrite the draft named by ``id``.

    Returns ``(letter, created)``.
    """
    if data.id is not None:
        letter = db.query(LetterDraft).filter(
            LetterDraft.id == data.id,
            LetterDraft.child_id == data.child_id,
        ).first()
        if not letter:
            raise NotFoundError("Letter not found", details={"id": str(data.id)})
        created = False
    else:
        letter = LetterDraft(child_id=data.child_id)
        db.add(letter)
        created = True

    letter.title = data.title.strip()
    letter.content = data.content
    letter.letter_type = data.letter_type
    db.commit()
    db.refresh(letter)
    return letter, created

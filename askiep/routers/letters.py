"""Letter drafts router."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from askiep.core.deps import get_db, get_owner_key
from askiep.schemas.letter import LetterRead, LetterSave
from askiep.services import letter_service, profile_service

router = APIRouter(prefix="/letters", tags=["letters"])


@router.get("/{child_id}", response_model=list[LetterRead])
def list_letters(
    child_id: UUID,
    owner_key: str = Depends(get_owner_key),
    db: Session = Depends(get_db),
):
    if not profile_service.get_child(db, owner_key, child_id):
        return []
    return letter_service.list_letters(db, child_id)


@router.post("", response_model=LetterRead)
def save_letter(
    data: LetterSave,
    response: Response,
    owner_key: str = Depends(get_owner_key),
    db: Session = Depends(get_db),
):
    """Append a draft (201), or overwrite the draft named by ``id`` (200)."""
    profile_service.require_child(db, owner_key, data.child_id)
    letter, created = letter_service.save_letter(db, data)
    response.status_code = 201 if created else 200
    return letter

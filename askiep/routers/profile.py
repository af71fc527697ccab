"""Profile router - the owner's child profile."""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from askiep.core.deps import get_db, get_owner_key
from askiep.core.errors import NotFoundError
from askiep.schemas.profile import ProfileRead, ProfileSave
from askiep.services import profile_service

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileRead | None)
def get_profile(
    owner_key: str = Depends(get_owner_key),
    db: Session = Depends(get_db),
):
    """Return the owner's profile, or null when none has been saved."""
    return profile_service.get_for_owner(db, owner_key)


@router.post("", response_model=ProfileRead)
def save_profile(
    data: ProfileSave,
    response: Response,
    owner_key: str = Depends(get_owner_key),
    db: Session = Depends(get_db),
):
    """Create the profile (201) or update it in place (200)."""
    profile, created = profile_service.save_profile(db, owner_key, data)
    response.status_code = 201 if created else 200
    return profile


@router.delete("", status_code=204)
def delete_profile(
    owner_key: str = Depends(get_owner_key),
    db: Session = Depends(get_db),
):
    """Delete the profile together with every record attached to it."""
    profile = profile_service.get_for_owner(db, owner_key)
    if not profile:
        raise NotFoundError("Child profile not found")
    profile_service.delete_profile(db, profile)
    return Response(status_code=204)

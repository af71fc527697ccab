"""Profile service - one child profile per owner key."""

from uuid import UUID

from sqlalchemy.orm import Session

from askiep.core.errors import NotFoundError
from askiep.db.models import ChildProfile
from askiep.schemas.profile import ProfileSave


def get_for_owner(db: Session, owner_key: str) -> ChildProfile | None:
    """Return the owner's profile, if one has been saved."""
    return db.query(ChildProfile).filter(ChildProfile.owner_key == owner_key).first()


def get_child(db: Session, owner_key: str, child_id: UUID) -> ChildProfile | None:
    """Get a profile by ID (owner-scoped)."""
    return db.query(ChildProfile).filter(
        ChildProfile.id == child_id,
        ChildProfile.owner_key == owner_key,
    ).first()


def require_child(db: Session, owner_key: str, child_id: UUID) -> ChildProfile:
    child = get_child(db, owner_key, child_id)
    if not child:
        raise NotFoundError("Child profile not found", details={"child_id": str(child_id)})
    return child


def save_profile(
    db: Session, owner_key: str, data: ProfileSave
) -> tuple[ChildProfile, bool]:
    """
    Create or update the owner's profile.

    With ``id`` the matching profile is updated; without it the owner's
    existing profile (if any) is updated. Returns ``(profile, created)``.
    """
    if data.id is not None:
        profile = require_child(db, owner_key, data.id)
    else:
        profile = get_for_owner(db, owner_key)

    created = profile is None
    if created:
        profile = ChildProfile(owner_key=owner_key)
        db.add(profile)

    fields = data.model_dump(exclude={"id"})
    if fields.get("advocacy_level") is not None:
        fields["advocacy_level"] = data.advocacy_level.value
    for field, value in fields.items():
        setattr(profile, field, value)

    db.commit()
    db.refresh(profile)
    return profile, created


def delete_profile(db: Session, profile: ChildProfile) -> None:
    """Delete a profile and every record that references it."""
    db.delete(profile)
    db.commit()

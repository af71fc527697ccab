"""SQLAlchemy ORM models for profiles and the records tracked against them."""

import uuid
import datetime as dt
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, CheckConstraint, Date, ForeignKey, Index, Integer, String, Text, Time,
    Uuid, func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from askiep.db.base import Base, JSONList
from askiep.db.enums import DEFAULT_COMPLIANCE_STATUS, DEFAULT_GOAL_STATUS


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _child_fk() -> Mapped[uuid.UUID]:
    return mapped_column(
        Uuid,
        ForeignKey("child_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


def _created_at() -> Mapped[datetime]:
    return mapped_column(default=_utcnow, server_default=func.now(), nullable=False)


# =============================================================================
# Profile
# =============================================================================

class ChildProfile(Base):
    """
    The child whose IEP is being tracked.

    One profile per owner key. Every other record hangs off a profile and is
    removed with it.
    """
    __tablename__ = "child_profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_key: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    grade: Mapped[str | None] = mapped_column(String(50), nullable=True)
    disabilities: Mapped[list] = mapped_column(JSONList, default=list, nullable=False)
    focus_tags: Mapped[list] = mapped_column(JSONList, default=list, nullable=False)
    advocacy_level: Mapped[str | None] = mapped_column(String(20), nullable=True)
    primary_goal: Mapped[str | None] = mapped_column(Text, nullable=True)
    state_context: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_iep_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = mapped_column(
        default=_utcnow, onupdate=_utcnow, server_default=func.now(), nullable=False
    )

    # Relationships
    analyses: Mapped[list["IepAnalysis"]] = relationship(
        back_populates="child", cascade="all, delete-orphan", passive_deletes=True
    )
    documents: Mapped[list["IepDocument"]] = relationship(
        back_populates="child", cascade="all, delete-orphan", passive_deletes=True
    )
    compliance_logs: Mapped[list["ComplianceLog"]] = relationship(
        cascade="all, delete-orphan", passive_deletes=True
    )
    goal_progress: Mapped[list["GoalProgress"]] = relationship(
        cascade="all, delete-orphan", passive_deletes=True
    )
    comm_logs: Mapped[list["CommLogEntry"]] = relationship(
        cascade="all, delete-orphan", passive_deletes=True
    )
    behavior_logs: Mapped[list["BehaviorLog"]] = relationship(
        cascade="all, delete-orphan", passive_deletes=True
    )
    letters: Mapped[list["LetterDraft"]] = relationship(
        cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint(
            "advocacy_level IS NULL OR advocacy_level IN ('Beginner', 'Intermediate', 'Advanced')",
            name="ck_child_profiles_advocacy_level",
        ),
    )


# =============================================================================
# AI analysis & source documents
# =============================================================================

class IepAnalysis(Base):
    """Structured AI breakdown of an IEP. Immutable once written."""
    __tablename__ = "iep_analyses"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    child_id: Mapped[uuid.UUID] = _child_fk()
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    goals: Mapped[list] = mapped_column(JSONList, default=list, nullable=False)
    accommodations: Mapped[list] = mapped_column(JSONList, default=list, nullable=False)
    red_flags: Mapped[list] = mapped_column(JSONList, default=list, nullable=False)
    legal_lens: Mapped[str] = mapped_column(Text, nullable=False)
    # [{"service": ..., "frequency": ..., "setting": ...}] or NULL
    service_grid: Mapped[list | None] = mapped_column(JSONList, nullable=True)
    created_at: Mapped[datetime] = _created_at()

    child: Mapped["ChildProfile"] = relationship(back_populates="analyses")

    __table_args__ = (
        Index("ix_iep_analyses_child_created", "child_id", "created_at"),
    )


class IepDocument(Base):
    """Uploaded or pasted IEP text. Append-only."""
    __tablename__ = "iep_documents"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    child_id: Mapped[uuid.UUID] = _child_fk()
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    analysis_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("iep_analyses.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = _created_at()

    child: Mapped["ChildProfile"] = relationship(back_populates="documents")
    analysis: Mapped["IepAnalysis | None"] = relationship()


# =============================================================================
# Logs (append-only)
# =============================================================================

class ComplianceLog(Base):
    """One observed service-delivery event."""
    __tablename__ = "compliance_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    child_id: Mapped[uuid.UUID] = _child_fk()
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    service_type: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_COMPLIANCE_STATUS.value, nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = _created_at()

    __table_args__ = (
        CheckConstraint(
            "status IN ('Received', 'Partial', 'Missed')", name="ck_compliance_logs_status"
        ),
    )


class GoalProgress(Base):
    """A measurement of one goal. History is a sequence of rows."""
    __tablename__ = "goal_progress"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    child_id: Mapped[uuid.UUID] = _child_fk()
    goal_name: Mapped[str] = mapped_column(String(255), nullable=False)
    current_value: Mapped[str | None] = mapped_column(String(100), nullable=True)
    target_value: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_GOAL_STATUS.value, nullable=False
    )
    last_updated: Mapped[datetime] = _created_at()

    __table_args__ = (
        CheckConstraint(
            "status IN ('Emerging', 'Progressing', 'Mastered', 'Regression')",
            name="ck_goal_progress_status",
        ),
    )


class CommLogEntry(Base):
    """Contact with school staff."""
    __tablename__ = "communication_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    child_id: Mapped[uuid.UUID] = _child_fk()
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    contact_name: Mapped[str] = mapped_column(String(255), nullable=False)
    method: Mapped[str] = mapped_column(String(20), nullable=False)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    follow_up_needed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = _created_at()

    __table_args__ = (
        CheckConstraint(
            "method IN ('Email', 'Phone', 'In-person', 'IEP Meeting')",
            name="ck_communication_logs_method",
        ),
    )


class BehaviorLog(Base):
    """ABC (antecedent / behavior / consequence) observation."""
    __tablename__ = "behavior_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    child_id: Mapped[uuid.UUID] = _child_fk()
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time: Mapped[dt.time | None] = mapped_column(Time, nullable=True)
    antecedent: Mapped[str | None] = mapped_column(Text, nullable=True)
    behavior: Mapped[str] = mapped_column(Text, nullable=False)
    consequence: Mapped[str | None] = mapped_column(Text, nullable=True)
    intensity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = _created_at()

    __table_args__ = (
        CheckConstraint("intensity BETWEEN 1 AND 5", name="ck_behavior_logs_intensity"),
    )


# =============================================================================
# Letters (mutable)
# =============================================================================

class LetterDraft(Base):
    __tablename__ = "letter_drafts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    child_id: Mapped[uuid.UUID] = _child_fk()
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    letter_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_edited: Mapped[datetime] = mapped_column(
        default=_utcnow, onupdate=_utcnow, server_default=func.now(), nullable=False
    )

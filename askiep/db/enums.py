"""Enum definitions for closed status fields.

Values are the labels shown to parents and stored verbatim.
"""

from enum import Enum


class AdvocacyLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class ComplianceStatus(str, Enum):
    """Whether a mandated service was delivered on a given date."""
    RECEIVED = "Received"
    PARTIAL = "Partial"
    MISSED = "Missed"


class GoalStatus(str, Enum):
    EMERGING = "Emerging"
    PROGRESSING = "Progressing"
    MASTERED = "Mastered"
    REGRESSION = "Regression"


class CommMethod(str, Enum):
    EMAIL = "Email"
    PHONE = "Phone"
    IN_PERSON = "In-person"
    IEP_MEETING = "IEP Meeting"


DEFAULT_COMPLIANCE_STATUS = ComplianceStatus.RECEIVED
DEFAULT_GOAL_STATUS = GoalStatus.EMERGING

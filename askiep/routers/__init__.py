"""API routers."""

from askiep.routers import (
    ai,
    behavior,
    comms,
    compliance,
    dashboard,
    documents,
    letters,
    profile,
    progress,
)

__all__ = [
    "ai",
    "behavior",
    "comms",
    "compliance",
    "dashboard",
    "documents",
    "letters",
    "profile",
    "progress",
]

"""FastAPI dependencies for database access, owner scoping and the AI gateway."""

from typing import Generator

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from askiep.core.config import settings
from askiep.core.errors import InfrastructureError
from askiep.db.session import SessionLocal
from askiep.services.ai_gateway import AIGateway, build_ai_gateway

OWNER_HEADER = "X-Owner-Key"


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_owner_key(
    x_owner_key: str | None = Header(default=None, alias=OWNER_HEADER),
) -> str:
    """Identify whose profile a request addresses. Not an authentication check."""
    owner_key = (x_owner_key or "").strip()
    return owner_key[:64] or settings.DEFAULT_OWNER_KEY


def get_ai_gateway() -> AIGateway | None:
    """The configured gateway, or None when no API key is set."""
    if not settings.AI_API_KEY:
        return None
    return build_ai_gateway()


def require_ai_gateway(gateway: AIGateway | None = Depends(get_ai_gateway)) -> AIGateway:
    if gateway is None:
        raise InfrastructureError("AI service is not configured")
    return gateway

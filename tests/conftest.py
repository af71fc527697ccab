"""
Test configuration and fixtures.

Provides:
- A throwaway SQLite database (tables wiped after each test)
- HTTPX AsyncClient over ASGITransport with owner header
- A stub AI provider wired through the real AIGateway
"""
import os
import tempfile
import uuid
from pathlib import Path
from typing import AsyncGenerator, Generator

# Must be set before askiep reads its settings
_TEST_DIR = tempfile.mkdtemp(prefix="askiep-tests-")
os.environ["TESTING"] = "1"
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_TEST_DIR) / 'test.db'}"
os.environ["AI_API_KEY"] = ""
os.environ["RATE_LIMIT_API"] = ""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

from askiep.core.deps import get_ai_gateway, get_db
from askiep.db.base import Base
from askiep.db.models import ChildProfile
from askiep.db.session import SessionLocal, engine
from askiep.main import app
from askiep.services.ai_gateway import AIGateway
from askiep.services.ai_provider import AIProvider, ChatMessage, ChatResponse

OWNER_KEY = "test-owner"


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="session", autouse=True)
def _schema() -> Generator[None, None, None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Session for one test. Every table is emptied afterwards so app code is
    free to commit.
    """
    session = SessionLocal()
    yield session
    session.rollback()
    session.close()
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture(scope="function")
def child(db: Session) -> ChildProfile:
    """A saved profile owned by OWNER_KEY."""
    profile = ChildProfile(
        id=uuid.uuid4(),
        owner_key=OWNER_KEY,
        name="Alex",
        age=9,
        grade="3rd",
        disabilities=["ADHD"],
        focus_tags=["Reading"],
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


# =============================================================================
# AI Fixtures
# =============================================================================

class StubProvider(AIProvider):
    """Returns canned replies (or raises canned errors) in order."""

    def __init__(self, *replies: str | Exception):
        super().__init__("test-key", "stub-model")
        self.replies = list(replies) or [""]
        self.calls: list[dict] = []

    async def chat(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 2000,
        response_schema: dict | None = None,
    ) -> ChatResponse:
        self.calls.append({"messages": messages, "response_schema": response_schema})
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return ChatResponse(
            content=reply,
            prompt_tokens=10,
            completion_tokens=20,
            total_tokens=30,
            model="stub-model",
        )


@pytest.fixture
def stub_ai():
    """Install a stub-backed gateway; call with the replies to serve."""

    def _install(*replies: str | Exception) -> StubProvider:
        provider = StubProvider(*replies)
        gateway = AIGateway(provider)
        app.dependency_overrides[get_ai_gateway] = lambda: gateway
        return provider

    yield _install
    app.dependency_overrides.pop(get_ai_gateway, None)


@pytest.fixture
def stub_gateway():
    """Build a real AIGateway over a StubProvider, for direct (non-HTTP) use."""
    def _build(*replies: str | Exception) -> AIGateway:
        return AIGateway(StubProvider(*replies))

    return _build


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient against the app, sending the test owner key."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-Owner-Key": OWNER_KEY},
    ) as c:
        yield c

    app.dependency_overrides.clear()

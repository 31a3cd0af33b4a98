"""
LexiNote Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── db_engine / db_session: in-memory SQLite with all tables created
    ├── mock_db_session: AsyncMock session for forcing database errors
    ├── vendor_stub: scripted fake for the three vendor APIs (counts calls)
    ├── http_client: httpx.AsyncClient routed through vendor_stub
    ├── ai_service: the real dispatch facade over http_client
    ├── make_provider: ProviderConfig factory
    └── test_client: HTTPX AsyncClient against a fresh app with the
                     database and AI dependencies overridden

No test touches the network or a file on disk.
"""

import os

# Settings are read at import time: configure before importing lexinote
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

import json
from typing import Any, List, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from lexinote.database import get_db_session, upgrade_schema
from lexinote.schemas.ai import ProviderConfig
from lexinote.services.ai_service import build_ai_service


# ══════════════════════════════════════════════════════════════════════════
# Vendor API Stub
# ══════════════════════════════════════════════════════════════════════════


def openai_envelope(text: str) -> dict:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": text}}],
    }


def gemini_envelope(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def anthropic_envelope(text: str) -> dict:
    return {
        "id": "msg_test",
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": text}],
    }


ENVELOPES = {
    "api.openai.com": openai_envelope,
    "generativelanguage.googleapis.com": gemini_envelope,
    "api.anthropic.com": anthropic_envelope,
}


class VendorStub:
    """
    Stands in for OpenAI, Gemini and Anthropic behind httpx.MockTransport.

    By default every request succeeds with `reply_text` wrapped in the
    envelope of whichever vendor host was called. Tests can instead force a
    raw JSON body, a status code, a non-JSON body, or a transport error.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.reply_text = "A simpler version of the text."
        self.status_code = 200
        self.raw_json: Optional[Any] = None
        self.raw_body: Optional[bytes] = None
        self.error: Optional[Exception] = None

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict:
        return json.loads(self.last_request.content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        if self.raw_json is not None:
            return httpx.Response(self.status_code, json=self.raw_json)
        if self.status_code >= 400:
            return httpx.Response(self.status_code, json={"error": {"message": "upstream failure"}})
        return httpx.Response(200, json=ENVELOPES[request.url.host](self.reply_text))


@pytest.fixture
def vendor_stub() -> VendorStub:
    return VendorStub()


@pytest_asyncio.fixture
async def http_client(vendor_stub):
    """httpx.AsyncClient whose every request is answered by vendor_stub."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(vendor_stub.handler)) as client:
        yield client


@pytest.fixture
def ai_service(http_client):
    return build_ai_service(http_client)


@pytest.fixture
def make_provider():
    """
    Factory for ProviderConfig values.

    Usage:
        provider = make_provider("gemini")
        provider = make_provider("openai", api_key="  ")
    """

    def _make(vendor: str, api_key: str = "test-key-not-real", model: str = "") -> ProviderConfig:
        return ProviderConfig(vendor=vendor, api_key=api_key, model=model, is_active=True)

    return _make


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════


@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite shared by every session of one test.

    StaticPool keeps a single connection, so data committed by one session
    is visible to the next.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await upgrade_schema(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession for forcing database failures.

    Usage:
        mock_db_session.execute = AsyncMock(side_effect=OperationalError(...))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.get = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# HTTP API
# ══════════════════════════════════════════════════════════════════════════


@pytest_asyncio.fixture
async def test_client(session_factory, ai_service):
    """
    HTTPX AsyncClient talking to a fresh app instance.

    ASGITransport does not run the lifespan, so the database session and the
    AI facade are injected through dependency overrides.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from lexinote.main import create_app
    from lexinote.routes.ai import get_ai_service

    app = create_app()

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_ai_service] = lambda: ai_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

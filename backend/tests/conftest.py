"""
HeroVault Backend - Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a fresh in-memory SQLite database (aiosqlite +
       StaticPool), so store, service and API tests run without a server.

Fixture Hierarchy (all function-scoped):
    test_settings ── engine ──┬── session_factory ── character_store / superhero_store
                              └── app ── test_client
    sample_image_bytes / sample_png_bytes: tiny image payloads
    mock_store: AsyncMock DocumentStore for pure service tests
"""

import os
from unittest.mock import AsyncMock, MagicMock

# Must run before herovault is imported: main.py builds a module-level app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from herovault.config import Settings
from herovault.database import create_engine_from_settings, create_session_factory, create_tables
from herovault.main import create_app
from herovault.models.character import Character
from herovault.models.superhero import Superhero
from herovault.services.document_store import DocumentStore


@pytest.fixture
def test_settings():
    """Settings pointing at an in-memory database with a 64KB upload cap."""
    return Settings(
        database_url="sqlite+aiosqlite://",
        max_upload_size=64 * 1024,
        store_timeout_seconds=5,
        log_level="WARNING",
        expose_error_details=True,
    )


@pytest_asyncio.fixture
async def engine(test_settings):
    engine = create_engine_from_settings(test_settings)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def character_store(session_factory):
    return DocumentStore(session_factory, Character, timeout=5)


@pytest.fixture
def superhero_store(session_factory):
    return DocumentStore(session_factory, Superhero, timeout=5)


@pytest.fixture
def mock_store():
    """
    A DocumentStore stand-in whose operations are AsyncMocks.

    Usage:
        mock_store.find_by_id.return_value = None
        with pytest.raises(NotFoundError):
            await CharacterService(mock_store).get("some-id")
    """
    store = MagicMock(spec=DocumentStore)
    store.insert = AsyncMock()
    store.find_all = AsyncMock(return_value=[])
    store.find_by_id = AsyncMock(return_value=None)
    store.find_and_update_by_id = AsyncMock(return_value=None)
    store.find_and_delete_by_id = AsyncMock(return_value=None)
    return store


@pytest.fixture
def app(test_settings, engine):
    return create_app(test_settings, engine=engine)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient wired straight into the ASGI app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_image_bytes():
    """Minimal JPEG: SOI marker + JFIF header + EOI marker."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def sample_png_bytes():
    """PNG signature followed by an IHDR chunk header."""
    return b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"

"""Pytest configuration and fixtures."""

import os
import tempfile

# Settings are read once at import time, so point them at scratch space first.
_TEST_DIR = tempfile.mkdtemp(prefix="dsa_flash_test_")
os.environ.setdefault("DATABASE_URL_OVERRIDE", f"sqlite+aiosqlite:///{_TEST_DIR}/test.db")
os.environ.setdefault("UPLOAD_DIR", os.path.join(_TEST_DIR, "uploads"))
os.environ.setdefault("ENVIRONMENT", "development")

import httpx  # noqa: E402
import pytest  # noqa: E402
from collections.abc import AsyncGenerator  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from dsa_flash.client.app import open_store  # noqa: E402
from dsa_flash.client.store import StudyStore  # noqa: E402
from dsa_flash.config import ClientSettings  # noqa: E402
from dsa_flash.db.base import Base  # noqa: E402
from dsa_flash.db.session import engine, init_models  # noqa: E402
from dsa_flash.main import app  # noqa: E402


@pytest.fixture(autouse=True)
async def database() -> AsyncGenerator[None, None]:
    """Fresh tables for every test."""
    await init_models()
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # Pooled connections belong to this test's event loop
    await engine.dispose()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


def _refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


@pytest.fixture
async def offline_client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose every request fails at the transport level."""
    async with AsyncClient(
        transport=httpx.MockTransport(_refuse),
        base_url="http://offline",
    ) as ac:
        yield ac


@pytest.fixture
def client_settings(tmp_path) -> ClientSettings:
    return ClientSettings(cache_dir=tmp_path / "cache")


@pytest.fixture
async def store(client, client_settings) -> AsyncGenerator[StudyStore, None]:
    """Store talking to the real app."""
    async with open_store(client_settings, http=client) as s:
        yield s


@pytest.fixture
async def offline_store(offline_client, client_settings) -> AsyncGenerator[StudyStore, None]:
    """Store whose remote side is unreachable, so everything runs on the local cache."""
    async with open_store(client_settings, http=offline_client) as s:
        yield s

"""Pytest fixtures shared by the AppDesk test suite."""

import uuid
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.app import app
from src.database.session import get_db
from src.modules.tenancy.auth import AuthenticatedUser, get_current_user


@pytest.fixture
def mock_session():
    session = AsyncMock()
    session.add = MagicMock()
    session.flush = AsyncMock()
    return session


@pytest.fixture
def app_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def operator(app_id: uuid.UUID) -> AuthenticatedUser:
    return AuthenticatedUser(
        id=uuid.uuid4(),
        email="operator@example.com",
        app_id=app_id,
        role="OPERATOR",
    )


@pytest_asyncio.fixture
async def api_client(mock_session, operator) -> AsyncGenerator[AsyncClient, None]:
    """Yield an httpx AsyncClient wired to the app with a mocked session and operator."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield mock_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: operator

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()

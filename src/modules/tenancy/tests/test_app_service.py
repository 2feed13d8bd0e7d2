"""Unit tests for AppService and the app-scoping dependencies."""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.exceptions import ForbiddenException, NotFoundException
from src.models.tenant_app import TenantApp
from src.modules.category.schemas import LockingPolicy
from src.modules.tenancy.app_service import AppService
from src.modules.tenancy.auth import AuthenticatedUser
from src.modules.tenancy.dependencies import require_app_access, require_platform_admin


def _make_user(app_id: uuid.UUID | None = None, is_platform_admin: bool = False) -> AuthenticatedUser:
    return AuthenticatedUser(
        id=uuid.uuid4(),
        email="operator@example.com",
        app_id=app_id,
        role="OPERATOR",
        is_platform_admin=is_platform_admin,
    )


def _mock_db_with_app(app: TenantApp | None):
    db = AsyncMock()
    db.add = MagicMock()
    db.get.return_value = app
    return db


@pytest.mark.asyncio
async def test_create_app_adds_and_flushes():
    db = _mock_db_with_app(None)

    app = await AppService(db).create_app("Marketplace")

    assert app.name == "Marketplace"
    db.add.assert_called_once_with(app)
    db.flush.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_app_missing_raises_not_found():
    db = _mock_db_with_app(None)

    with pytest.raises(NotFoundException, match="not found"):
        await AppService(db).get_app(uuid.uuid4())


@pytest.mark.asyncio
async def test_locking_policy_absent_is_none():
    app = TenantApp(id=uuid.uuid4(), name="Demo", locking_json=None)
    db = _mock_db_with_app(app)

    assert await AppService(db).get_locking_policy(app.id) is None


@pytest.mark.asyncio
async def test_set_locking_policy_stores_camel_case_document():
    app = TenantApp(id=uuid.uuid4(), name="Demo", locking_json=None)
    db = _mock_db_with_app(app)

    await AppService(db).set_locking_policy(app.id, LockingPolicy(lock_sub_category=True))

    assert app.locking_json["lockSubCategory"] is True
    assert app.locking_json["lockCategory"] is False
    db.flush.assert_awaited_once()

    policy = await AppService(db).get_locking_policy(app.id)
    assert policy.lock_sub_category is True


def test_operator_may_access_own_app():
    app_id = uuid.uuid4()
    user = _make_user(app_id=app_id)

    assert require_app_access(app_id, user) is user


def test_operator_may_not_access_other_app():
    user = _make_user(app_id=uuid.uuid4())

    with pytest.raises(ForbiddenException, match="access to this app"):
        require_app_access(uuid.uuid4(), user)


def test_platform_admin_may_access_any_app():
    user = _make_user(is_platform_admin=True)

    assert require_app_access(uuid.uuid4(), user) is user


def test_require_platform_admin_rejects_operator():
    with pytest.raises(ForbiddenException, match="Platform admin"):
        require_platform_admin(_make_user(app_id=uuid.uuid4()))

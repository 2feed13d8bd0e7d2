"""Tests for CategoryService: root cap, lock and depth checks, cascade delete, tree view."""

from __future__ import annotations

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from src.exceptions import (
    BusinessRuleException,
    CategoryDepthException,
    CategoryLevelLockedException,
    NotFoundException,
    RootCategoryLimitException,
)
from src.models.category import AppCategory
from src.models.enums import CategoryStatus
from src.models.tenant_app import TenantApp
from src.modules.category.schemas import CategoryCreate, CategoryUpdate
from src.modules.category.service import CategoryService

TENANT = uuid.uuid4()


def _category(n: int, parent: int | None = None, tenant_id: uuid.UUID = TENANT) -> AppCategory:
    return AppCategory(
        id=uuid.UUID(int=n),
        tenant_id=tenant_id,
        parent_id=uuid.UUID(int=parent) if parent is not None else None,
        name=f"category-{n}",
        sort_order=n,
        status=CategoryStatus.ACTIVE,
    )


def _scalars_result(items: list) -> MagicMock:
    result = MagicMock()
    result.scalars.return_value.all.return_value = items
    return result


def _count_result(count: int) -> MagicMock:
    result = MagicMock()
    result.scalar.return_value = count
    return result


def _rowcount_result(count: int) -> MagicMock:
    result = MagicMock()
    result.rowcount = count
    return result


@pytest.fixture
def mock_session():
    session = AsyncMock()
    session.add = MagicMock()
    session.flush = AsyncMock()
    return session


@pytest.fixture
def category_service(mock_session):
    return CategoryService(mock_session)


def _wire_get(mock_session, categories: list[AppCategory], locking: dict | None = None) -> None:
    app = TenantApp(id=TENANT, name="Demo", locking_json=locking)
    by_id = {c.id: c for c in categories}

    def _get(model, key, **kwargs):
        if model is TenantApp:
            return app if key == TENANT else None
        return by_id.get(key)

    mock_session.get.side_effect = _get


class TestCreateRoot:
    @pytest.mark.asyncio
    async def test_sixth_regular_root_is_accepted(self, category_service, mock_session) -> None:
        _wire_get(mock_session, [])
        mock_session.execute.return_value = _count_result(5)

        category = await category_service.create_category(TENANT, CategoryCreate(name="Sixth"))

        assert category.parent_id is None
        assert category.tenant_id == TENANT
        mock_session.add.assert_called_once()
        mock_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_seventh_regular_root_is_rejected(self, category_service, mock_session) -> None:
        _wire_get(mock_session, [])
        mock_session.execute.return_value = _count_result(6)

        with pytest.raises(RootCategoryLimitException, match="at most 6"):
            await category_service.create_category(TENANT, CategoryCreate(name="Seventh"))

        mock_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_addon_roots_are_not_capped(self, category_service, mock_session) -> None:
        _wire_get(mock_session, [])

        await category_service.create_category(TENANT, CategoryCreate(name="Ads", kind="addon"))

        mock_session.execute.assert_not_awaited()
        mock_session.add.assert_called_once()

    @pytest.mark.asyncio
    async def test_unknown_app_raises_not_found(self, category_service, mock_session) -> None:
        _wire_get(mock_session, [])

        with pytest.raises(NotFoundException, match="App"):
            await category_service.create_category(uuid.uuid4(), CategoryCreate(name="Root"))


class TestCreateChild:
    @pytest.mark.asyncio
    async def test_child_under_open_level(self, category_service, mock_session) -> None:
        nodes = [_category(1)]
        _wire_get(mock_session, nodes)
        mock_session.execute.return_value = _scalars_result(nodes)

        child = await category_service.create_category(
            TENANT, CategoryCreate(name="Child", parent_id=uuid.UUID(int=1))
        )

        assert child.parent_id == uuid.UUID(int=1)
        mock_session.add.assert_called_once()

    @pytest.mark.asyncio
    async def test_locked_level_rejects_child(self, category_service, mock_session) -> None:
        nodes = [_category(1)]
        _wire_get(mock_session, nodes, locking={"lockCategory": True})
        mock_session.execute.return_value = _scalars_result(nodes)

        with pytest.raises(CategoryLevelLockedException, match="locked"):
            await category_service.create_category(
                TENANT, CategoryCreate(name="Child", parent_id=uuid.UUID(int=1))
            )

        mock_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_lock_on_other_level_does_not_block(self, category_service, mock_session) -> None:
        nodes = [_category(1)]
        _wire_get(mock_session, nodes, locking={"lockChildCategory": True})
        mock_session.execute.return_value = _scalars_result(nodes)

        await category_service.create_category(
            TENANT, CategoryCreate(name="Child", parent_id=uuid.UUID(int=1))
        )

        mock_session.add.assert_called_once()

    @pytest.mark.asyncio
    async def test_fifth_level_is_rejected(self, category_service, mock_session) -> None:
        nodes = [_category(1), _category(2, parent=1), _category(3, parent=2), _category(4, parent=3)]
        _wire_get(mock_session, nodes)
        mock_session.execute.return_value = _scalars_result(nodes)

        with pytest.raises(CategoryDepthException, match="nested deeper"):
            await category_service.create_category(
                TENANT, CategoryCreate(name="Too deep", parent_id=uuid.UUID(int=4))
            )

    @pytest.mark.asyncio
    async def test_parent_in_other_app_is_not_found(self, category_service, mock_session) -> None:
        foreign = _category(7, tenant_id=uuid.uuid4())
        _wire_get(mock_session, [foreign])

        with pytest.raises(NotFoundException, match="not found"):
            await category_service.create_category(
                TENANT, CategoryCreate(name="Child", parent_id=foreign.id)
            )


class TestUpdateCategory:
    @pytest.mark.asyncio
    async def test_updates_only_set_fields(self, category_service, mock_session) -> None:
        node = _category(1)
        _wire_get(mock_session, [node])

        updated = await category_service.update_category(
            TENANT, node.id, CategoryUpdate(name="Renamed")
        )

        assert updated.name == "Renamed"
        assert updated.sort_order == 1
        mock_session.flush.assert_awaited_once()

    def test_parent_is_not_updatable(self) -> None:
        assert "parent_id" not in CategoryUpdate.model_fields

    @pytest.mark.parametrize("field", ["name", "sort_order", "status"])
    def test_explicit_null_is_rejected_for_required_columns(self, field) -> None:
        with pytest.raises(ValidationError, match="may not be null"):
            CategoryUpdate(**{field: None})

    def test_nullable_columns_can_be_cleared(self) -> None:
        update = CategoryUpdate(kind=None, image_ref=None, registration_limit=None)

        assert update.model_dump(exclude_unset=True) == {
            "kind": None,
            "image_ref": None,
            "registration_limit": None,
        }

    @pytest.mark.asyncio
    async def test_addon_root_cannot_take_seventh_regular_slot(
        self, category_service, mock_session
    ) -> None:
        addon = _category(1)
        addon.kind = "addon"
        _wire_get(mock_session, [addon])
        mock_session.execute.return_value = _count_result(6)

        with pytest.raises(RootCategoryLimitException, match="at most 6"):
            await category_service.update_category(TENANT, addon.id, CategoryUpdate(kind=None))

        assert addon.kind == "addon"
        mock_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_addon_root_turns_regular_below_cap(self, category_service, mock_session) -> None:
        addon = _category(1)
        addon.kind = "addon"
        _wire_get(mock_session, [addon])
        mock_session.execute.return_value = _count_result(5)

        updated = await category_service.update_category(
            TENANT, addon.id, CategoryUpdate(kind=None)
        )

        assert updated.kind is None
        mock_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_renaming_addon_root_skips_cap(self, category_service, mock_session) -> None:
        addon = _category(1)
        addon.kind = "addon"
        _wire_get(mock_session, [addon])

        await category_service.update_category(TENANT, addon.id, CategoryUpdate(name="Promos"))

        mock_session.execute.assert_not_awaited()


class TestDeleteCategory:
    @pytest.mark.asyncio
    async def test_cascade_reports_counts(self, category_service, mock_session) -> None:
        nodes = [_category(1), _category(2, parent=1), _category(3, parent=2), _category(4)]
        _wire_get(mock_session, nodes)
        mock_session.execute.side_effect = [
            _scalars_result(nodes),
            _rowcount_result(5),  # registrations
            _rowcount_result(2),  # forms
            _rowcount_result(3),  # categories
        ]

        outcome = await category_service.delete_category(TENANT, uuid.UUID(int=1))

        assert outcome.category_id == uuid.UUID(int=1)
        assert outcome.deleted_categories == 3
        assert outcome.deleted_forms == 2
        assert outcome.deleted_submissions == 5
        assert mock_session.execute.await_count == 4
        mock_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_category_deletes_nothing(self, category_service, mock_session) -> None:
        _wire_get(mock_session, [])

        with pytest.raises(NotFoundException):
            await category_service.delete_category(TENANT, uuid.uuid4())

        mock_session.execute.assert_not_awaited()


class TestGetTree:
    @pytest.mark.asyncio
    async def test_tree_is_annotated(self, category_service, mock_session) -> None:
        nodes = [_category(1), _category(2, parent=1)]
        _wire_get(mock_session, nodes, locking={"lockSubCategory": True})
        form_ids = MagicMock()
        form_ids.scalars.return_value.all.return_value = [uuid.UUID(int=2)]
        mock_session.execute.side_effect = [_scalars_result(nodes), form_ids]

        roots = await category_service.get_tree(TENANT)

        assert [r.id for r in roots] == [uuid.UUID(int=1)]
        child = roots[0].children[0]
        assert child.depth == 1
        assert child.has_form is True
        assert child.children_locked is True
        assert child.can_add_child is False
        assert child.can_attach_form is True


def test_tree_rule_errors_are_business_rule_violations() -> None:
    for exc_type in (RootCategoryLimitException, CategoryDepthException, CategoryLevelLockedException):
        assert issubclass(exc_type, BusinessRuleException)
        assert exc_type("x").status_code == 422

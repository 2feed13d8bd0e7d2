"""Category service: per-app category store, tree view, and cascade delete."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.exceptions import (
    BusinessRuleException,
    CategoryDepthException,
    CategoryLevelLockedException,
    NotFoundException,
    RootCategoryLimitException,
)
from src.models.category import AppCategory
from src.models.category_form import CategoryForm
from src.models.registration import Registration
from src.modules.category.constants import ADDON_KIND, LEVEL_NAMES
from src.modules.category.locking import annotate_tree, is_locked
from src.modules.category.schemas import (
    CascadeDeleteResult,
    CategoryCreate,
    CategoryTreeNode,
    CategoryUpdate,
    LockingPolicy,
)
from src.modules.category.tree import build_tree, collect_subtree_ids, compute_depth

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def create_category(self, tenant_id: uuid.UUID, data: CategoryCreate) -> AppCategory:
        """Create a category under an app root or an existing parent.

        Regular roots are capped per app; addon roots are not. Children are
        rejected when their level is locked or would exceed the tree depth.
        """
        policy = await self._load_policy(tenant_id)

        if data.parent_id is None:
            if data.kind != ADDON_KIND:
                await self._check_root_cap(tenant_id)
        else:
            await self._get_category_or_404(tenant_id, data.parent_id)
            nodes = await self.list_categories(tenant_id)
            parent_depth = compute_depth(nodes, data.parent_id)
            if parent_depth is None:
                raise BusinessRuleException(
                    f"Parent category {data.parent_id} is not attached to the tree"
                )
            depth = parent_depth + 1
            if depth > settings.max_tree_depth:
                raise CategoryDepthException(
                    f"Categories cannot be nested deeper than {settings.max_tree_depth + 1} levels"
                )
            if is_locked(policy, depth):
                raise CategoryLevelLockedException(
                    f"{LEVEL_NAMES[depth]} level is locked for this app; attach a custom form instead"
                )

        category = AppCategory(
            tenant_id=tenant_id,
            parent_id=data.parent_id,
            name=data.name,
            kind=data.kind,
            image_ref=data.image_ref,
            sort_order=data.sort_order,
            status=data.status,
            registration_limit=data.registration_limit,
        )
        self._session.add(category)
        await self._session.flush()
        logger.info("Created category %s '%s' in app %s", category.id, data.name, tenant_id)
        return category

    async def get_category(self, tenant_id: uuid.UUID, category_id: uuid.UUID) -> AppCategory:
        return await self._get_category_or_404(tenant_id, category_id)

    async def update_category(
        self, tenant_id: uuid.UUID, category_id: uuid.UUID, data: CategoryUpdate
    ) -> AppCategory:
        category = await self._get_category_or_404(tenant_id, category_id)
        update_data = data.model_dump(exclude_unset=True)
        if (
            "kind" in update_data
            and category.parent_id is None
            and category.kind == ADDON_KIND
            and update_data["kind"] != ADDON_KIND
        ):
            # An addon root turning regular takes one of the capped slots
            await self._check_root_cap(tenant_id)
        for field, value in update_data.items():
            setattr(category, field, value)
        await self._session.flush()
        return category

    async def list_categories(self, tenant_id: uuid.UUID) -> list[AppCategory]:
        """Flat node list for one app, the input of the tree builder."""
        stmt = (
            select(AppCategory)
            .where(AppCategory.tenant_id == tenant_id)
            .order_by(AppCategory.sort_order, AppCategory.id)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def delete_category(
        self, tenant_id: uuid.UUID, category_id: uuid.UUID
    ) -> CascadeDeleteResult:
        """Hard-delete a category, its whole subtree, and every form and
        submission anchored on a node of that subtree.

        All statements run in the caller's transaction, so the cascade is
        all-or-nothing.
        """
        await self._get_category_or_404(tenant_id, category_id)
        nodes = await self.list_categories(tenant_id)
        subtree_ids = collect_subtree_ids(nodes, category_id)

        submissions = await self._session.execute(
            delete(Registration).where(
                Registration.tenant_id == tenant_id,
                Registration.category_id.in_(list(subtree_ids)),
            )
        )
        forms = await self._session.execute(
            delete(CategoryForm).where(
                CategoryForm.tenant_id == tenant_id,
                CategoryForm.category_id.in_(list(subtree_ids)),
            )
        )
        categories = await self._session.execute(
            delete(AppCategory).where(
                AppCategory.tenant_id == tenant_id,
                AppCategory.id.in_(list(subtree_ids)),
            )
        )
        await self._session.flush()

        outcome = CascadeDeleteResult(
            category_id=category_id,
            deleted_categories=categories.rowcount or 0,
            deleted_forms=forms.rowcount or 0,
            deleted_submissions=submissions.rowcount or 0,
        )
        logger.info(
            "Deleted category %s from app %s: %d categories, %d forms, %d submissions",
            category_id,
            tenant_id,
            outcome.deleted_categories,
            outcome.deleted_forms,
            outcome.deleted_submissions,
        )
        return outcome

    # ------------------------------------------------------------------
    # Hierarchy
    # ------------------------------------------------------------------

    async def get_tree(
        self,
        tenant_id: uuid.UUID,
        root_id: uuid.UUID | None = None,
    ) -> list[CategoryTreeNode]:
        """Nested tree for an app, annotated with lock and form affordances.

        If *root_id* is given, returns the children of that category.
        """
        policy = await self._load_policy(tenant_id)
        nodes = await self.list_categories(tenant_id)

        depth = 0
        if root_id is not None:
            await self._get_category_or_404(tenant_id, root_id)
            root_depth = compute_depth(nodes, root_id)
            depth = (root_depth or 0) + 1

        form_result = await self._session.execute(
            select(CategoryForm.category_id).where(CategoryForm.tenant_id == tenant_id)
        )
        form_category_ids = set(form_result.scalars().all())

        roots = build_tree(nodes, root_id, depth=depth)
        annotate_tree(roots, policy, form_category_ids)
        return roots

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _load_policy(self, tenant_id: uuid.UUID) -> LockingPolicy | None:
        from src.modules.tenancy.app_service import AppService

        return await AppService(self._session).get_locking_policy(tenant_id)

    async def _check_root_cap(self, tenant_id: uuid.UUID) -> None:
        stmt = select(func.count()).select_from(AppCategory).where(
            AppCategory.tenant_id == tenant_id,
            AppCategory.parent_id.is_(None),
            or_(AppCategory.kind.is_(None), AppCategory.kind != ADDON_KIND),
        )
        result = await self._session.execute(stmt)
        regular_roots = result.scalar() or 0
        if regular_roots >= settings.max_root_categories:
            raise RootCategoryLimitException(
                f"An app can have at most {settings.max_root_categories} sub apps"
            )

    async def _get_category_or_404(
        self, tenant_id: uuid.UUID, category_id: uuid.UUID
    ) -> AppCategory:
        category = await self._session.get(AppCategory, category_id)
        if category is None or category.tenant_id != tenant_id:
            raise NotFoundException(f"Category {category_id} not found")
        return category

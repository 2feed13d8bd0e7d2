"""App service: tenant records and their locking policy document."""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from src.exceptions import NotFoundException
from src.models.enums import AppStatus
from src.models.tenant_app import TenantApp
from src.modules.category.locking import parse_policy
from src.modules.category.schemas import LockingPolicy

logger = logging.getLogger(__name__)


class AppService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_app(self, name: str) -> TenantApp:
        app = TenantApp(name=name, status=AppStatus.ACTIVE)
        self.db.add(app)
        await self.db.flush()
        logger.info("Created app %s (%s)", app.id, name)
        return app

    async def get_app(self, app_id: uuid.UUID) -> TenantApp:
        app = await self.db.get(TenantApp, app_id)
        if app is None:
            raise NotFoundException(f"App {app_id} not found")
        return app

    async def get_locking_policy(self, app_id: uuid.UUID) -> LockingPolicy | None:
        """Return the app's policy, or None when it has never been set."""
        app = await self.get_app(app_id)
        return parse_policy(app.locking_json)

    async def set_locking_policy(self, app_id: uuid.UUID, policy: LockingPolicy) -> LockingPolicy:
        """Replace the app's locking document.

        Locking a level never touches existing categories; it only gates new
        children from here on.
        """
        app = await self.get_app(app_id)
        app.locking_json = policy.model_dump(by_alias=True)
        await self.db.flush()
        logger.info(
            "Locking updated for app %s: category=%s sub_category=%s child_category=%s",
            app_id,
            policy.lock_category,
            policy.lock_sub_category,
            policy.lock_child_category,
        )
        return policy

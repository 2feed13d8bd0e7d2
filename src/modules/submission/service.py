"""Submission service: registrant submissions against category forms."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.exceptions import ConflictException, NotFoundException, RegistrationLimitException
from src.models.category_form import CategoryForm
from src.models.enums import RegistrationStatus
from src.models.registrant import Registrant
from src.models.registration import Registration
from src.modules.category.service import CategoryService
from src.modules.forms.schemas import FieldDefinition
from src.modules.forms.service import FormSchemaService, load_fields
from src.modules.submission.headers import aggregate_headers, project_row
from src.modules.submission.lookup import ReferenceLookupService, collect_lookup_keys
from src.modules.submission.resolver import resolve
from src.modules.submission.schemas import (
    ResolvedSubmission,
    SubmissionCreate,
    SubmissionPatch,
    SubmissionTable,
)
from src.modules.submission.validators import validate_submission_values

logger = logging.getLogger(__name__)


class SubmissionService:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create_submission(
        self, tenant_id: uuid.UUID, data: SubmissionCreate
    ) -> Registration:
        """Record a registrant's submission under a category.

        Values are checked against the enabled fields of the category's form;
        a category without a form accepts the document as-is. A registrant
        registers once per app, and a category with a ``registration_limit``
        stops accepting submissions once it is reached.
        """
        category = await CategoryService(self._session).get_category(tenant_id, data.category_id)

        registrant = None
        if data.registrant_id is not None:
            registrant = await self._get_registrant_or_404(tenant_id, data.registrant_id)
            await self._check_not_registered(tenant_id, registrant.id)

        if category.registration_limit is not None:
            count_result = await self._session.execute(
                select(func.count()).select_from(Registration).where(
                    Registration.tenant_id == tenant_id,
                    Registration.category_id == category.id,
                )
            )
            if (count_result.scalar() or 0) >= category.registration_limit:
                raise RegistrationLimitException(
                    f"Category '{category.name}' has reached its limit of "
                    f"{category.registration_limit} registrations"
                )

        fields = await self._form_fields(tenant_id, category.id)
        if fields:
            validate_submission_values(data.raw_data, fields)

        if registrant is None:
            registrant = Registrant(tenant_id=tenant_id, **data.registrant.model_dump())
            self._session.add(registrant)
            await self._session.flush()

        submission = Registration(
            tenant_id=tenant_id,
            category_id=category.id,
            registrant_id=registrant.id,
            raw_data=dict(data.raw_data),
            status=RegistrationStatus.PENDING,
        )
        submission.registrant = registrant
        self._session.add(submission)
        await self._session.flush()
        logger.info(
            "Created submission %s for registrant %s in category %s",
            submission.id,
            registrant.id,
            category.id,
        )
        return submission

    async def patch_submission(
        self, tenant_id: uuid.UUID, submission_id: uuid.UUID, data: SubmissionPatch
    ) -> Registration:
        """Merge edited values into a submission and update contact details.

        Only the keys being patched are validated, against every field of the
        current form including disabled ones.
        """
        submission = await self.get_submission(tenant_id, submission_id)

        if data.raw_data:
            fields = await self._form_fields(tenant_id, submission.category_id)
            if fields:
                validate_submission_values(data.raw_data, fields, partial=True)
            # New dict so the JSONB column is flagged dirty
            submission.raw_data = {**(submission.raw_data or {}), **data.raw_data}

        if data.contact is not None:
            for field, value in data.contact.model_dump(exclude_unset=True).items():
                setattr(submission.registrant, field, value)

        await self._session.flush()
        return submission

    async def update_status(
        self, tenant_id: uuid.UUID, submission_id: uuid.UUID, status: RegistrationStatus
    ) -> Registration:
        submission = await self.get_submission(tenant_id, submission_id)
        previous = submission.status
        submission.status = status
        submission.registrant.active = status == RegistrationStatus.ACTIVE
        await self._session.flush()
        logger.info(
            "Submission %s status changed from %s to %s", submission_id, previous, status
        )
        return submission

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_submission(
        self, tenant_id: uuid.UUID, submission_id: uuid.UUID
    ) -> Registration:
        stmt = (
            select(Registration)
            .options(selectinload(Registration.registrant))
            .where(Registration.id == submission_id, Registration.tenant_id == tenant_id)
        )
        result = await self._session.execute(stmt)
        submission = result.scalar_one_or_none()
        if submission is None:
            raise NotFoundException(f"Submission {submission_id} not found")
        return submission

    async def list_submissions(
        self,
        tenant_id: uuid.UUID,
        category_id: uuid.UUID | None = None,
        status: RegistrationStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[Registration], int]:
        stmt = select(Registration).where(Registration.tenant_id == tenant_id)
        count_stmt = select(func.count()).select_from(Registration).where(
            Registration.tenant_id == tenant_id
        )

        if category_id is not None:
            stmt = stmt.where(Registration.category_id == category_id)
            count_stmt = count_stmt.where(Registration.category_id == category_id)
        if status is not None:
            stmt = stmt.where(Registration.status == status)
            count_stmt = count_stmt.where(Registration.status == status)

        total_result = await self._session.execute(count_stmt)
        total = total_result.scalar() or 0

        stmt = stmt.order_by(Registration.created_at.desc(), Registration.id).limit(limit).offset(offset)
        result = await self._session.execute(stmt)
        return list(result.scalars().all()), total

    async def list_resolved(
        self,
        tenant_id: uuid.UUID,
        category_id: uuid.UUID | None = None,
        status: RegistrationStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> SubmissionTable:
        """Resolved rows plus one header set spanning all of them.

        Each row is resolved against its own category's current form, with
        mapped values looked up in bulk before resolution.
        """
        submissions, total = await self.list_submissions(
            tenant_id, category_id=category_id, status=status, limit=limit, offset=offset
        )

        fields_by_category = await self._fields_by_category(
            tenant_id, {s.category_id for s in submissions}
        )
        keys = collect_lookup_keys(
            (s.raw_data or {}, fields_by_category.get(s.category_id, [])) for s in submissions
        )
        lookups = await ReferenceLookupService(self._session).prefetch(keys)

        resolved_rows = [
            resolve(s.raw_data or {}, fields_by_category.get(s.category_id), lookups)
            for s in submissions
        ]
        headers = aggregate_headers(resolved_rows)

        rows = [
            ResolvedSubmission(
                submission_id=s.id,
                category_id=s.category_id,
                registrant_id=s.registrant_id,
                status=s.status,
                fields=resolved,
                cells=project_row(resolved, headers),
            )
            for s, resolved in zip(submissions, resolved_rows)
        ]
        return SubmissionTable(headers=headers, rows=rows, total=total)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _form_fields(
        self, tenant_id: uuid.UUID, category_id: uuid.UUID
    ) -> list[FieldDefinition]:
        form = await FormSchemaService(self._session).find_form(tenant_id, category_id)
        return load_fields(form)

    async def _fields_by_category(
        self, tenant_id: uuid.UUID, category_ids: set[uuid.UUID]
    ) -> dict[uuid.UUID, list[FieldDefinition]]:
        if not category_ids:
            return {}
        stmt = select(CategoryForm).where(
            CategoryForm.tenant_id == tenant_id,
            CategoryForm.category_id.in_(list(category_ids)),
        )
        result = await self._session.execute(stmt)
        return {form.category_id: load_fields(form) for form in result.scalars().all()}

    async def _get_registrant_or_404(
        self, tenant_id: uuid.UUID, registrant_id: uuid.UUID
    ) -> Registrant:
        registrant = await self._session.get(Registrant, registrant_id)
        if registrant is None or registrant.tenant_id != tenant_id:
            raise NotFoundException(f"Registrant {registrant_id} not found")
        return registrant

    async def _check_not_registered(self, tenant_id: uuid.UUID, registrant_id: uuid.UUID) -> None:
        result = await self._session.execute(
            select(Registration.id).where(
                Registration.tenant_id == tenant_id,
                Registration.registrant_id == registrant_id,
            )
        )
        if result.scalar_one_or_none() is not None:
            raise ConflictException(f"Registrant {registrant_id} is already registered in this app")

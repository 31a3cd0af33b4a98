"""
LexiNote Backend — Provider Settings Service
==============================================

What:  Key-value style settings store for the user's AI Provider Configs.
How:   One `ai_providers` row per vendor tag. Saving with is_active=True or
       calling activate() clears the flag on every other row, so at most one
       provider is active at any time.
Who:   Providers routes (settings screen) and the AI routes, which read the
       active provider before dispatching.

API keys are stored as given and never logged. ProviderResponse exposes only
the last four characters.
"""

import logging
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lexinote.exceptions import DatabaseError, NotFoundError, ValidationError
from lexinote.models.provider import AIProviderRecord
from lexinote.schemas.ai import ProviderConfig, VendorType
from lexinote.schemas.note import ProviderResponse, ProviderUpsert

logger = logging.getLogger(__name__)

SUPPORTED_VENDORS = {vendor.value for vendor in VendorType}


def _to_response(record: AIProviderRecord) -> ProviderResponse:
    key = record.api_key or ""
    return ProviderResponse(
        vendor=record.vendor,
        model=record.model,
        is_active=record.is_active,
        has_api_key=bool(key.strip()),
        api_key_hint=f"…{key[-4:]}" if len(key) > 4 else "",
    )


class ProviderService:
    """CRUD over stored provider configs plus the single-active rule."""

    def _normalize_vendor(self, vendor: str) -> str:
        tag = vendor.strip().lower()
        if tag not in SUPPORTED_VENDORS:
            raise ValidationError(
                message=(
                    f"Vendor '{vendor}' is not supported. "
                    f"Supported vendors: {', '.join(sorted(SUPPORTED_VENDORS))}"
                ),
                field="vendor",
                context={"vendor": vendor},
            )
        return tag

    async def _get_record(self, db: AsyncSession, vendor: str) -> Optional[AIProviderRecord]:
        result = await db.execute(select(AIProviderRecord).where(AIProviderRecord.vendor == vendor))
        return result.scalar_one_or_none()

    async def _deactivate_all(self, db: AsyncSession) -> None:
        await db.execute(update(AIProviderRecord).values(is_active=False))

    async def list_providers(self, db: AsyncSession) -> List[ProviderResponse]:
        try:
            result = await db.execute(select(AIProviderRecord).order_by(AIProviderRecord.vendor))
            return [_to_response(record) for record in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing providers: %s", str(e))
            raise DatabaseError(message="Could not load AI provider settings.")

    async def save_provider(
        self,
        db: AsyncSession,
        vendor: str,
        payload: ProviderUpsert,
    ) -> ProviderResponse:
        """
        Create or update the config for `vendor`.

        Raises:
            ValidationError: unknown vendor tag (→ 400)
        """
        tag = self._normalize_vendor(vendor)
        try:
            if payload.is_active:
                await self._deactivate_all(db)

            record = await self._get_record(db, tag)
            if record is None:
                record = AIProviderRecord(vendor=tag)
                db.add(record)

            record.api_key = payload.api_key.strip()
            record.model = payload.model.strip()
            record.is_active = payload.is_active

            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error saving provider %s: %s", tag, str(e))
            raise DatabaseError(message="Could not save AI provider settings.")

        logger.info("Provider %s saved (model=%s, active=%s)", tag, record.model or "default", record.is_active)
        return _to_response(record)

    async def activate(self, db: AsyncSession, vendor: str) -> ProviderResponse:
        """
        Make `vendor` the only active provider.

        Raises:
            ValidationError: unknown vendor tag (→ 400)
            NotFoundError:   nothing saved for this vendor yet (→ 404)
        """
        tag = self._normalize_vendor(vendor)
        try:
            record = await self._get_record(db, tag)
            if record is None:
                raise NotFoundError(resource="provider", resource_id=tag)

            await self._deactivate_all(db)
            record.is_active = True
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error activating provider %s: %s", tag, str(e))
            raise DatabaseError(message="Could not activate the AI provider.")

        logger.info("Provider %s activated", tag)
        return _to_response(record)

    async def get_active_provider(self, db: AsyncSession) -> Optional[ProviderConfig]:
        """The active Provider Config, or None when nothing is active."""
        try:
            result = await db.execute(
                select(AIProviderRecord).where(AIProviderRecord.is_active.is_(True))
            )
            record = result.scalars().first()
        except SQLAlchemyError as e:
            logger.error("Database error loading active provider: %s", str(e))
            raise DatabaseError(message="Could not load AI provider settings.")

        if record is None:
            return None
        return ProviderConfig(
            vendor=record.vendor,
            api_key=record.api_key,
            model=record.model,
            is_active=True,
        )

    async def delete_provider(self, db: AsyncSession, vendor: str) -> None:
        tag = self._normalize_vendor(vendor)
        try:
            record = await self._get_record(db, tag)
            if record is None:
                raise NotFoundError(resource="provider", resource_id=tag)
            await db.delete(record)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting provider %s: %s", tag, str(e))
            raise DatabaseError(message="Could not delete the AI provider.")

        logger.info("Provider %s deleted", tag)


# ── Singleton Instance ────────────────────────────────────────────────────
provider_service = ProviderService()

"""
LexiNote Backend — Provider Settings Routes
=============================================

What:  Manage the stored AI Provider Configs and which one is active.
Who:   The app's settings screen.

Route Inventory:
    GET    /api/providers                    all saved providers (keys masked)
    GET    /api/providers/active             the active provider, or null
    PUT    /api/providers/{vendor}           create or update one vendor's config
    POST   /api/providers/{vendor}/activate  make it the only active provider
    DELETE /api/providers/{vendor}           forget a vendor's config (204)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from lexinote.database import get_db_session
from lexinote.schemas.note import ErrorResponse, ProviderResponse, ProviderUpsert
from lexinote.services.provider_service import provider_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/providers", tags=["Providers"])


@router.get("", response_model=List[ProviderResponse], summary="List saved AI providers")
async def list_providers(
    db: AsyncSession = Depends(get_db_session),
) -> List[ProviderResponse]:
    return await provider_service.list_providers(db)


@router.get(
    "/active",
    response_model=Optional[ProviderResponse],
    summary="The provider AI requests go to",
)
async def get_active_provider(
    db: AsyncSession = Depends(get_db_session),
) -> Optional[ProviderResponse]:
    providers = await provider_service.list_providers(db)
    return next((p for p in providers if p.is_active), None)


@router.put(
    "/{vendor}",
    response_model=ProviderResponse,
    responses={400: {"description": "Unknown vendor", "model": ErrorResponse}},
    summary="Save the config for one vendor",
)
async def save_provider(
    vendor: str,
    body: ProviderUpsert,
    db: AsyncSession = Depends(get_db_session),
) -> ProviderResponse:
    """Saving with is_active=true deactivates every other provider."""
    return await provider_service.save_provider(db, vendor, body)


@router.post(
    "/{vendor}/activate",
    response_model=ProviderResponse,
    responses={
        400: {"description": "Unknown vendor", "model": ErrorResponse},
        404: {"description": "Vendor has no saved config", "model": ErrorResponse},
    },
    summary="Make a saved provider the active one",
)
async def activate_provider(
    vendor: str,
    db: AsyncSession = Depends(get_db_session),
) -> ProviderResponse:
    return await provider_service.activate(db, vendor)


@router.delete(
    "/{vendor}",
    status_code=204,
    responses={404: {"description": "Vendor has no saved config", "model": ErrorResponse}},
    summary="Delete a vendor's config",
)
async def delete_provider(
    vendor: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await provider_service.delete_provider(db, vendor)
    return Response(status_code=204)

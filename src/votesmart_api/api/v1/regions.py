"""Region endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from votesmart_api.api.v1.common import WRITE_RESPONSES, check_batch_size, forbidden
from votesmart_api.core.config import Settings, get_settings
from votesmart_api.core.dependencies import get_async_session, get_caller_account_id
from votesmart_api.schemas.common import WindowParams
from votesmart_api.schemas.directory import BatchRequest, ItemsResponse, RegionEntry
from votesmart_api.services.access_service import UnauthorizedError
from votesmart_api.services.directory_service import add_regions, get_regions

regions_router = APIRouter(prefix="/regions", tags=["regions"])


@regions_router.post("", status_code=status.HTTP_204_NO_CONTENT, responses=WRITE_RESPONSES)
async def add_regions_endpoint(
    body: BatchRequest[RegionEntry],
    session: Annotated[AsyncSession, Depends(get_async_session)],
    caller_id: Annotated[str, Depends(get_caller_account_id)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> None:
    """Add or overwrite regions. Master only."""
    check_batch_size(len(body.items), settings)
    try:
        await add_regions(session, caller_id=caller_id, regions=[entry.to_pair() for entry in body.items])
    except UnauthorizedError as e:
        raise forbidden() from e
    except Exception as e:
        logger.error(f"Unexpected error adding regions: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error adding regions.",
        ) from e


@regions_router.get("")
async def list_regions(
    window: Annotated[WindowParams, Query()],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ItemsResponse[RegionEntry]:
    """List regions in insertion order."""
    pairs = await get_regions(session, from_index=window.from_index, limit=window.limit)
    return ItemsResponse[RegionEntry](items=[RegionEntry.from_pair(pair) for pair in pairs])

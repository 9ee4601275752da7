"""District endpoints, including the per-region listing."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from votesmart_api.api.v1.common import WRITE_RESPONSES, check_batch_size, forbidden
from votesmart_api.core.config import Settings, get_settings
from votesmart_api.core.dependencies import get_async_session, get_caller_account_id
from votesmart_api.models.types import UINT64_MAX
from votesmart_api.schemas.common import WindowParams
from votesmart_api.schemas.directory import BatchRequest, DistrictEntry, ItemsResponse
from votesmart_api.services.access_service import UnauthorizedError
from votesmart_api.services.directory_service import add_districts, get_districts, get_districts_by_region

districts_router = APIRouter(prefix="/districts", tags=["districts"])


@districts_router.post("", status_code=status.HTTP_204_NO_CONTENT, responses=WRITE_RESPONSES)
async def add_districts_endpoint(
    body: BatchRequest[DistrictEntry],
    session: Annotated[AsyncSession, Depends(get_async_session)],
    caller_id: Annotated[str, Depends(get_caller_account_id)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> None:
    """Add or overwrite districts. Master only."""
    check_batch_size(len(body.items), settings)
    try:
        await add_districts(session, caller_id=caller_id, districts=[entry.to_pair() for entry in body.items])
    except UnauthorizedError as e:
        raise forbidden() from e
    except Exception as e:
        logger.error(f"Unexpected error adding districts: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error adding districts.",
        ) from e


@districts_router.get("")
async def list_districts(
    window: Annotated[WindowParams, Query()],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ItemsResponse[DistrictEntry]:
    """List districts in insertion order."""
    pairs = await get_districts(session, from_index=window.from_index, limit=window.limit)
    return ItemsResponse[DistrictEntry](items=[DistrictEntry.from_pair(pair) for pair in pairs])


@districts_router.get("/by-region/{region_id}")
async def list_districts_by_region(
    region_id: Annotated[int, Path(ge=0, le=UINT64_MAX)],
    window: Annotated[WindowParams, Query()],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ItemsResponse[DistrictEntry]:
    """List districts of one region.

    ``from_index`` and ``limit`` select positions in the full districts
    table; only districts of ``region_id`` within those positions are
    returned, so pages may be short or empty.
    """
    pairs = await get_districts_by_region(session, region_id, from_index=window.from_index, limit=window.limit)
    return ItemsResponse[DistrictEntry](items=[DistrictEntry.from_pair(pair) for pair in pairs])

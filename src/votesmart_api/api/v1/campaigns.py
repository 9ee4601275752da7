"""Campaign endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from votesmart_api.api.v1.common import WRITE_RESPONSES, forbidden
from votesmart_api.core.dependencies import get_async_session, get_caller_account_id
from votesmart_api.schemas.common import WindowParams
from votesmart_api.schemas.directory import ItemsResponse, TitledEntry
from votesmart_api.services.access_service import UnauthorizedError
from votesmart_api.services.directory_service import add_campaign, get_campaigns

campaigns_router = APIRouter(prefix="/campaigns", tags=["campaigns"])


@campaigns_router.post("", status_code=status.HTTP_204_NO_CONTENT, responses=WRITE_RESPONSES)
async def add_campaign_endpoint(
    body: TitledEntry,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    caller_id: Annotated[str, Depends(get_caller_account_id)],
) -> None:
    """Add or overwrite one campaign. Master only."""
    try:
        await add_campaign(session, caller_id=caller_id, campaign_id=body.id, title=body.title)
    except UnauthorizedError as e:
        raise forbidden() from e
    except Exception as e:
        logger.error(f"Unexpected error adding campaign {body.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error adding campaign.",
        ) from e


@campaigns_router.get("")
async def list_campaigns(
    window: Annotated[WindowParams, Query()],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ItemsResponse[TitledEntry]:
    """List campaigns in insertion order."""
    pairs = await get_campaigns(session, from_index=window.from_index, limit=window.limit)
    return ItemsResponse[TitledEntry](items=[TitledEntry.from_pair(pair) for pair in pairs])

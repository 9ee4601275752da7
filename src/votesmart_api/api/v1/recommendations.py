"""Recommendation endpoints.

POST /recommendations maintains the index; GET /votesmart/{campaign_id}/{district_id}
resolves it.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from votesmart_api.api.v1.common import WRITE_RESPONSES, check_batch_size, forbidden
from votesmart_api.core.config import Settings, get_settings
from votesmart_api.core.dependencies import get_async_session, get_caller_account_id
from votesmart_api.models.types import UINT64_MAX
from votesmart_api.schemas.directory import BatchRequest
from votesmart_api.schemas.recommendation import Recommendation, RecommendationLink
from votesmart_api.services.access_service import UnauthorizedError
from votesmart_api.services.recommendation_service import add_recommendations, get_votesmart

recommendations_router = APIRouter(tags=["recommendations"])

EntityPath = Annotated[int, Path(ge=0, le=UINT64_MAX)]


@recommendations_router.post(
    "/recommendations",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=WRITE_RESPONSES,
)
async def add_recommendations_endpoint(
    body: BatchRequest[RecommendationLink],
    session: Annotated[AsyncSession, Depends(get_async_session)],
    caller_id: Annotated[str, Depends(get_caller_account_id)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> None:
    """Point (campaign, district) pairs at candidates. Master only."""
    check_batch_size(len(body.items), settings)
    try:
        await add_recommendations(
            session,
            caller_id=caller_id,
            recommendations=[link.to_triple() for link in body.items],
        )
    except UnauthorizedError as e:
        raise forbidden() from e
    except Exception as e:
        logger.error(f"Unexpected error adding recommendations: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error adding recommendations.",
        ) from e


@recommendations_router.get("/votesmart/{campaign_id}/{district_id}")
async def get_votesmart_endpoint(
    campaign_id: EntityPath,
    district_id: EntityPath,
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> Recommendation | None:
    """Return the recommended candidate and party, or null when none is recorded."""
    return await get_votesmart(session, campaign_id, district_id)

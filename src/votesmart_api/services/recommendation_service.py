"""Recommendation service -- maintains the recommendation index and resolves lookups."""

from collections.abc import Iterable

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from votesmart_api.schemas.recommendation import Recommendation
from votesmart_api.services.access_service import admin_write
from votesmart_api.services.registry_store import RecommendationIndex, candidate_table, party_table

UNKNOWN_PARTY = "Unknown"


async def add_recommendations(
    session: AsyncSession,
    *,
    caller_id: str,
    recommendations: Iterable[tuple[int, int, int]],
) -> int:
    """Store ``(campaign_id, district_id, candidate_id)`` triples.

    A later triple for the same campaign and district replaces the earlier
    candidate. Candidate ids are not checked against the candidates table.

    Returns:
        Number of triples written.

    Raises:
        UnauthorizedError: If the caller is not the master account.
    """
    index = RecommendationIndex(session)
    count = 0
    async with admin_write(session, caller_id):
        for campaign_id, district_id, candidate_id in recommendations:
            await index.insert_or_overwrite(campaign_id, district_id, candidate_id)
            count += 1
        await session.commit()
    logger.info(f"{caller_id} stored {count} recommendations")
    return count


async def get_votesmart(session: AsyncSession, campaign_id: int, district_id: int) -> Recommendation | None:
    """Resolve the recommended candidate for a campaign and district.

    Dangling references are tolerated: a missing index entry or candidate
    yields None, and a missing party yields ``"Unknown"`` as the party title.

    Args:
        session: Database session.
        campaign_id: Campaign to resolve for.
        district_id: District to resolve for.

    Returns:
        The Recommendation, or None if nothing is recommended.
    """
    candidate_id = await RecommendationIndex(session).get(campaign_id, district_id)
    if candidate_id is None:
        return None

    candidate = await candidate_table(session).get(candidate_id)
    if candidate is None:
        logger.debug(f"Recommendation ({campaign_id}, {district_id}) points at missing candidate {candidate_id}")
        return None

    party = await party_table(session).get(candidate.party_id)
    return Recommendation(title=candidate.title, party=party if party is not None else UNKNOWN_PARTY)

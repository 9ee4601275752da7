"""Directory service -- bulk adds and paginated listings for the reference tables.

Every ``add_*`` operation runs inside :func:`admin_write`, which checks the
caller against the master account before any table is touched and keeps
writers from interleaving. Each call commits once at the end, so a rejected
or failed call changes nothing. Listings are public.
"""

from collections.abc import Iterable
from typing import TypeVar

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from votesmart_api.lib.pagination import window_range
from votesmart_api.models.district import District
from votesmart_api.schemas.directory import CandidateData, DistrictData, RegionData
from votesmart_api.services.access_service import admin_write
from votesmart_api.services.registry_store import (
    OrderedTable,
    campaign_table,
    candidate_table,
    district_table,
    paginate,
    party_table,
    region_table,
)

V = TypeVar("V")


async def _add_entries(
    session: AsyncSession,
    table: OrderedTable[V],
    entries: Iterable[tuple[int, V]],
    *,
    caller_id: str,
    kind: str,
) -> int:
    count = 0
    async with admin_write(session, caller_id):
        for key, value in entries:
            await table.insert_or_overwrite(key, value)
            count += 1
        await session.commit()
    logger.info(f"{caller_id} stored {count} {kind}")
    return count


async def add_campaign(session: AsyncSession, *, caller_id: str, campaign_id: int, title: str) -> None:
    """Store a single campaign, overwriting any campaign with the same id.

    Raises:
        UnauthorizedError: If the caller is not the master account.
    """
    await _add_entries(session, campaign_table(session), [(campaign_id, title)], caller_id=caller_id, kind="campaigns")


async def get_campaigns(
    session: AsyncSession,
    *,
    from_index: int | None = None,
    limit: int | None = None,
) -> list[tuple[int, str]]:
    """Return ``(id, title)`` pairs of campaigns in the requested window."""
    return await paginate(campaign_table(session), from_index, limit)


async def add_parties(session: AsyncSession, *, caller_id: str, parties: Iterable[tuple[int, str]]) -> int:
    """Store parties as ``(id, title)`` pairs.

    Returns:
        Number of entries written.

    Raises:
        UnauthorizedError: If the caller is not the master account.
    """
    return await _add_entries(session, party_table(session), parties, caller_id=caller_id, kind="parties")


async def get_parties(
    session: AsyncSession,
    *,
    from_index: int | None = None,
    limit: int | None = None,
) -> list[tuple[int, str]]:
    """Return ``(id, title)`` pairs of parties in the requested window."""
    return await paginate(party_table(session), from_index, limit)


async def add_regions(session: AsyncSession, *, caller_id: str, regions: Iterable[tuple[int, RegionData]]) -> int:
    """Store regions as ``(id, RegionData)`` pairs."""
    return await _add_entries(session, region_table(session), regions, caller_id=caller_id, kind="regions")


async def get_regions(
    session: AsyncSession,
    *,
    from_index: int | None = None,
    limit: int | None = None,
) -> list[tuple[int, RegionData]]:
    return await paginate(region_table(session), from_index, limit)


async def add_districts(
    session: AsyncSession,
    *,
    caller_id: str,
    districts: Iterable[tuple[int, DistrictData]],
) -> int:
    """Store districts as ``(id, DistrictData)`` pairs.

    The referenced region does not need to exist.
    """
    return await _add_entries(session, district_table(session), districts, caller_id=caller_id, kind="districts")


async def get_districts(
    session: AsyncSession,
    *,
    from_index: int | None = None,
    limit: int | None = None,
) -> list[tuple[int, DistrictData]]:
    return await paginate(district_table(session), from_index, limit)


async def get_districts_by_region(
    session: AsyncSession,
    region_id: int,
    *,
    from_index: int | None = None,
    limit: int | None = None,
) -> list[tuple[int, DistrictData]]:
    """Return districts of ``region_id`` found inside a window of the districts table.

    The window is taken over the whole districts table first and only then
    narrowed to the region, so a page can hold fewer districts than the
    window is wide, or none at all, even when later pages have matches.

    Args:
        session: Database session.
        region_id: Region to keep.
        from_index: First position of the unfiltered window.
        limit: Exclusive upper position bound of the unfiltered window.

    Returns:
        Matching ``(id, DistrictData)`` pairs in insertion order.
    """
    table = district_table(session)
    positions = window_range(await table.count(), from_index, limit)
    districts = await table.window(positions, District.region_id == region_id)
    logger.debug(f"Region {region_id}: {len(districts)} districts in positions {positions.start}-{positions.stop}")
    return districts


async def add_candidates(
    session: AsyncSession,
    *,
    caller_id: str,
    candidates: Iterable[tuple[int, CandidateData]],
) -> int:
    """Store candidates as ``(id, CandidateData)`` pairs.

    The referenced party does not need to exist.
    """
    return await _add_entries(session, candidate_table(session), candidates, caller_id=caller_id, kind="candidates")


async def get_candidates(
    session: AsyncSession,
    *,
    from_index: int | None = None,
    limit: int | None = None,
) -> list[tuple[int, CandidateData]]:
    return await paginate(candidate_table(session), from_index, limit)

"""Unit tests for the registry store against an in-memory database."""

from sqlalchemy.ext.asyncio import AsyncSession

from votesmart_api.models.district import District
from votesmart_api.models.types import UINT64_MAX
from votesmart_api.schemas.directory import CandidateData, DistrictData, RegionData
from votesmart_api.services.registry_store import (
    RecommendationIndex,
    candidate_table,
    district_table,
    paginate,
    party_table,
    region_table,
)


class TestOrderedTable:
    """Tests for OrderedTable insert/get/ordering."""

    async def test_insert_then_get(self, async_session: AsyncSession) -> None:
        parties = party_table(async_session)
        await parties.insert_or_overwrite(1, "Green")
        assert await parties.get(1) == "Green"

    async def test_get_missing_returns_none(self, async_session: AsyncSession) -> None:
        assert await party_table(async_session).get(404) is None

    async def test_keys_and_values_follow_insertion_order(self, async_session: AsyncSession) -> None:
        parties = party_table(async_session)
        for key, title in [(30, "C"), (10, "A"), (20, "B")]:
            await parties.insert_or_overwrite(key, title)
        assert await parties.keys() == [30, 10, 20]
        assert await parties.values() == ["C", "A", "B"]

    async def test_overwrite_keeps_position_and_count(self, async_session: AsyncSession) -> None:
        regions = region_table(async_session)
        await regions.insert_or_overwrite(1, RegionData(title="North"))
        await regions.insert_or_overwrite(2, RegionData(title="South"))
        await regions.insert_or_overwrite(1, RegionData(title="Far North"))

        assert await regions.count() == 2
        assert await regions.get(1) == RegionData(title="Far North")
        assert await regions.keys() == [1, 2]
        assert await regions.values() == [RegionData(title="Far North"), RegionData(title="South")]

    async def test_duplicate_key_within_one_batch(self, async_session: AsyncSession) -> None:
        candidates = candidate_table(async_session)
        await candidates.insert_or_overwrite(10, CandidateData(title="Alice", party_id=1))
        await candidates.insert_or_overwrite(10, CandidateData(title="Alicia", party_id=2))
        await async_session.commit()
        assert await candidates.count() == 1
        assert await candidates.get(10) == CandidateData(title="Alicia", party_id=2)

    async def test_large_unsigned_ids(self, async_session: AsyncSession) -> None:
        parties = party_table(async_session)
        await parties.insert_or_overwrite(UINT64_MAX, "Max")
        await parties.insert_or_overwrite(2**63, "Sign bit")
        await async_session.commit()
        assert await parties.get(UINT64_MAX) == "Max"
        assert await parties.get(2**63) == "Sign bit"
        assert await parties.keys() == [UINT64_MAX, 2**63]

    async def test_window_selects_positions(self, async_session: AsyncSession) -> None:
        parties = party_table(async_session)
        for key in range(5):
            await parties.insert_or_overwrite(key, f"P{key}")
        assert await parties.window(range(1, 3)) == [(1, "P1"), (2, "P2")]

    async def test_empty_window(self, async_session: AsyncSession) -> None:
        parties = party_table(async_session)
        await parties.insert_or_overwrite(1, "Green")
        assert await parties.window(range(3, 1)) == []

    async def test_window_criteria_only_narrow(self, async_session: AsyncSession) -> None:
        districts = district_table(async_session)
        for key, region_id in [(1, 7), (2, 8), (3, 7)]:
            await districts.insert_or_overwrite(key, DistrictData(region_id=region_id, title=f"D{key}"))
        result = await districts.window(range(0, 2), District.region_id == 7)
        assert result == [(1, DistrictData(region_id=7, title="D1"))]


class TestPaginate:
    """Tests for paginate."""

    async def test_defaults_return_everything_in_order(self, async_session: AsyncSession) -> None:
        parties = party_table(async_session)
        for key, title in [(3, "C"), (1, "A"), (2, "B")]:
            await parties.insert_or_overwrite(key, title)
        assert await paginate(parties) == [(3, "C"), (1, "A"), (2, "B")]

    async def test_limit_is_exclusive_upper_index(self, async_session: AsyncSession) -> None:
        parties = party_table(async_session)
        for key in range(10):
            await parties.insert_or_overwrite(key, f"P{key}")
        result = await paginate(parties, from_index=3, limit=5)
        assert [key for key, _ in result] == [3, 4]

    async def test_from_index_past_end(self, async_session: AsyncSession) -> None:
        parties = party_table(async_session)
        await parties.insert_or_overwrite(1, "Green")
        assert await paginate(parties, from_index=5) == []

    async def test_repeated_calls_identical(self, async_session: AsyncSession) -> None:
        parties = party_table(async_session)
        for key in range(6):
            await parties.insert_or_overwrite(key, f"P{key}")
        first = await paginate(parties, from_index=1, limit=4)
        second = await paginate(parties, from_index=1, limit=4)
        assert first == second


class TestRecommendationIndex:
    """Tests for the composite-key index."""

    async def test_get_missing(self, async_session: AsyncSession) -> None:
        assert await RecommendationIndex(async_session).get(100, 200) is None

    async def test_insert_and_get(self, async_session: AsyncSession) -> None:
        index = RecommendationIndex(async_session)
        await index.insert_or_overwrite(100, 200, 10)
        assert await index.get(100, 200) == 10

    async def test_components_are_not_interchangeable(self, async_session: AsyncSession) -> None:
        index = RecommendationIndex(async_session)
        await index.insert_or_overwrite(1, 2, 10)
        assert await index.get(2, 1) is None

    async def test_overwrite(self, async_session: AsyncSession) -> None:
        index = RecommendationIndex(async_session)
        await index.insert_or_overwrite(100, 200, 10)
        await index.insert_or_overwrite(100, 200, 11)
        await async_session.commit()
        assert await index.get(100, 200) == 11

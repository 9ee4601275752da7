"""Registry store: insertion-ordered tables and the recommendation index.

Each reference table behaves like an ordered map from a caller-chosen id to a
value. New ids are appended at the next position; re-inserting an existing id
replaces its value without moving it. Nothing is ever deleted, so positions
stay dense and a positional window is a simple range scan.
"""

from collections.abc import Callable
from operator import attrgetter
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from votesmart_api.lib.pagination import window_range
from votesmart_api.models.base import OrderedEntryMixin
from votesmart_api.models.campaign import Campaign
from votesmart_api.models.candidate import Candidate
from votesmart_api.models.district import District
from votesmart_api.models.party import Party
from votesmart_api.models.recommendation import RecommendationEntry
from votesmart_api.models.region import Region
from votesmart_api.schemas.directory import CandidateData, DistrictData, RegionData

V = TypeVar("V")


class OrderedTable(Generic[V]):
    """Ordered key/value view over one registry table.

    Args:
        session: Database session. The table never commits; callers own the
            transaction.
        model: ORM model with an ``id`` key and a ``position`` column.
        to_value: Projects a row onto the stored value.
        to_columns: Turns a value into column assignments for the row.
    """

    def __init__(
        self,
        session: AsyncSession,
        model: type[OrderedEntryMixin],
        *,
        to_value: Callable[[Any], V],
        to_columns: Callable[[V], dict[str, Any]],
    ) -> None:
        self._session = session
        self._model = model
        self._to_value = to_value
        self._to_columns = to_columns

    async def count(self) -> int:
        """Return the number of rows in the table."""
        result = await self._session.execute(select(func.count()).select_from(self._model))
        return result.scalar_one()

    async def get(self, key: int) -> V | None:
        """Return the value stored under ``key``, or None."""
        row = await self._session.get(self._model, key)
        return None if row is None else self._to_value(row)

    async def insert_or_overwrite(self, key: int, value: V) -> None:
        """Store ``value`` under ``key``, keeping the key's original position if present."""
        columns = self._to_columns(value)
        row = await self._session.get(self._model, key)
        if row is None:
            position = await self.count()
            self._session.add(self._model(id=key, position=position, **columns))
            await self._session.flush()
            return
        for name, column_value in columns.items():
            setattr(row, name, column_value)

    async def keys(self) -> list[int]:
        """Return all ids in insertion order."""
        result = await self._session.execute(select(self._model.id).order_by(self._model.position))
        return list(result.scalars().all())

    async def values(self) -> list[V]:
        """Return all values in insertion order, aligned with :meth:`keys`."""
        result = await self._session.execute(select(self._model).order_by(self._model.position))
        return [self._to_value(row) for row in result.scalars().all()]

    async def window(self, positions: range, *criteria: ColumnElement[bool]) -> list[tuple[int, V]]:
        """Return ``(id, value)`` pairs whose position falls in ``positions``.

        Extra ``criteria`` narrow the rows inside the window; they never
        widen it to reach rows past ``positions.stop``.
        """
        if not positions:
            return []
        model = self._model
        stmt = (
            select(model)
            .where(model.position >= positions.start, model.position < positions.stop, *criteria)
            .order_by(model.position)
        )
        result = await self._session.execute(stmt)
        return [(row.id, self._to_value(row)) for row in result.scalars().all()]


async def paginate(
    table: OrderedTable[V],
    from_index: int | None = None,
    limit: int | None = None,
) -> list[tuple[int, V]]:
    """Return the ``(id, value)`` pairs of ``table`` selected by ``from_index``/``limit``.

    ``limit`` is an exclusive upper position bound, not a page size. See
    :func:`votesmart_api.lib.pagination.window_range`.
    """
    positions = window_range(await table.count(), from_index, limit)
    return await table.window(positions)


def _titled(session: AsyncSession, model: type[OrderedEntryMixin]) -> OrderedTable[str]:
    return OrderedTable(
        session,
        model,
        to_value=attrgetter("title"),
        to_columns=lambda title: {"title": title},
    )


def party_table(session: AsyncSession) -> OrderedTable[str]:
    """Parties: id -> title."""
    return _titled(session, Party)


def campaign_table(session: AsyncSession) -> OrderedTable[str]:
    """Campaigns: id -> title."""
    return _titled(session, Campaign)


def region_table(session: AsyncSession) -> OrderedTable[RegionData]:
    return OrderedTable(
        session,
        Region,
        to_value=RegionData.model_validate,
        to_columns=lambda value: value.model_dump(),
    )


def district_table(session: AsyncSession) -> OrderedTable[DistrictData]:
    return OrderedTable(
        session,
        District,
        to_value=DistrictData.model_validate,
        to_columns=lambda value: value.model_dump(),
    )


def candidate_table(session: AsyncSession) -> OrderedTable[CandidateData]:
    return OrderedTable(
        session,
        Candidate,
        to_value=CandidateData.model_validate,
        to_columns=lambda value: value.model_dump(),
    )


class RecommendationIndex:
    """Composite-key index from (campaign_id, district_id) to candidate_id."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, campaign_id: int, district_id: int) -> int | None:
        """Return the candidate id recommended for the pair, or None."""
        entry = await self._session.get(RecommendationEntry, (campaign_id, district_id))
        return None if entry is None else entry.candidate_id

    async def insert_or_overwrite(self, campaign_id: int, district_id: int, candidate_id: int) -> None:
        """Point the pair at ``candidate_id``, replacing any previous candidate."""
        entry = await self._session.get(RecommendationEntry, (campaign_id, district_id))
        if entry is None:
            self._session.add(
                RecommendationEntry(campaign_id=campaign_id, district_id=district_id, candidate_id=candidate_id)
            )
            await self._session.flush()
            return
        entry.candidate_id = candidate_id

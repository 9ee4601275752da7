"""Pydantic v2 schemas for the reference tables.

``*Data`` models are the stored values of each table. ``*Entry`` models pair
a value with its key and are used both for bulk add request bodies and for
list responses.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

from votesmart_api.schemas.common import EntityId, Title

T = TypeVar("T")


class RegionData(BaseModel):
    """Stored value of the regions table."""

    model_config = {"from_attributes": True}

    title: Title


class DistrictData(BaseModel):
    """Stored value of the districts table."""

    model_config = {"from_attributes": True}

    region_id: EntityId
    title: Title


class CandidateData(BaseModel):
    """Stored value of the candidates table."""

    model_config = {"from_attributes": True}

    title: Title
    party_id: EntityId


class TitledEntry(BaseModel):
    """A party or campaign: an id and a title."""

    id: EntityId
    title: Title

    @classmethod
    def from_pair(cls, pair: tuple[int, str]) -> "TitledEntry":
        return cls(id=pair[0], title=pair[1])

    def to_pair(self) -> tuple[int, str]:
        return self.id, self.title


class RegionEntry(BaseModel):
    """A region keyed by its id."""

    id: EntityId
    title: Title

    @classmethod
    def from_pair(cls, pair: tuple[int, RegionData]) -> "RegionEntry":
        return cls(id=pair[0], **pair[1].model_dump())

    def to_pair(self) -> tuple[int, RegionData]:
        return self.id, RegionData(title=self.title)


class DistrictEntry(BaseModel):
    """A district keyed by its id."""

    id: EntityId
    region_id: EntityId
    title: Title

    @classmethod
    def from_pair(cls, pair: tuple[int, DistrictData]) -> "DistrictEntry":
        return cls(id=pair[0], **pair[1].model_dump())

    def to_pair(self) -> tuple[int, DistrictData]:
        return self.id, DistrictData(region_id=self.region_id, title=self.title)


class CandidateEntry(BaseModel):
    """A candidate keyed by its id."""

    id: EntityId
    title: Title
    party_id: EntityId

    @classmethod
    def from_pair(cls, pair: tuple[int, CandidateData]) -> "CandidateEntry":
        return cls(id=pair[0], **pair[1].model_dump())

    def to_pair(self) -> tuple[int, CandidateData]:
        return self.id, CandidateData(title=self.title, party_id=self.party_id)


class BatchRequest(BaseModel, Generic[T]):
    """Request body for bulk add operations."""

    items: list[T]


class ItemsResponse(BaseModel, Generic[T]):
    """Response body for list operations, in table insertion order."""

    items: list[T]

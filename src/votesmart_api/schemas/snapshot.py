"""Bulk-load file format.

A snapshot mirrors the arguments of the add operations, one list per table::

    {
      "parties": [[1, "Green"]],
      "candidates": [[10, {"title": "Alice", "party_id": 1}]],
      "recommendations": [[100, 200, 10]]
    }
"""

from pydantic import BaseModel

from votesmart_api.schemas.common import EntityId, Title
from votesmart_api.schemas.directory import CandidateData, DistrictData, RegionData


class RegistrySnapshot(BaseModel):
    """Contents of a registry load file. Every section is optional."""

    model_config = {"extra": "forbid"}

    campaigns: list[tuple[EntityId, Title]] = []
    parties: list[tuple[EntityId, Title]] = []
    regions: list[tuple[EntityId, RegionData]] = []
    districts: list[tuple[EntityId, DistrictData]] = []
    candidates: list[tuple[EntityId, CandidateData]] = []
    recommendations: list[tuple[EntityId, EntityId, EntityId]] = []

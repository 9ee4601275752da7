"""Pydantic v2 schemas for recommendations."""

from pydantic import BaseModel

from votesmart_api.schemas.common import EntityId


class RecommendationLink(BaseModel):
    """One entry of the recommendation index."""

    campaign_id: EntityId
    district_id: EntityId
    candidate_id: EntityId

    def to_triple(self) -> tuple[int, int, int]:
        return self.campaign_id, self.district_id, self.candidate_id


class Recommendation(BaseModel):
    """The recommended candidate for a campaign and district.

    ``party`` is the party title, or ``"Unknown"`` when the candidate's party
    is not in the registry.
    """

    title: str
    party: str

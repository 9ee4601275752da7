"""ORM model registry: import all models so Alembic autogenerate discovers them."""

from votesmart_api.models.campaign import Campaign
from votesmart_api.models.candidate import Candidate
from votesmart_api.models.district import District
from votesmart_api.models.party import Party
from votesmart_api.models.recommendation import RecommendationEntry
from votesmart_api.models.region import Region
from votesmart_api.models.registry_state import RegistryState

__all__ = [
    "Campaign",
    "Candidate",
    "District",
    "Party",
    "RecommendationEntry",
    "Region",
    "RegistryState",
]

"""Recommendation index: one candidate per (campaign, district) pair."""

from sqlalchemy.orm import Mapped, mapped_column

from votesmart_api.models.base import Base
from votesmart_api.models.types import UInt64


class RecommendationEntry(Base):
    """Maps a composite (campaign_id, district_id) key to a candidate id.

    The pair is the primary key, so resolving a recommendation is a single
    primary-key lookup. None of the three ids are foreign keys.
    """

    __tablename__ = "recommendations"

    campaign_id: Mapped[int] = mapped_column(UInt64, primary_key=True, autoincrement=False)
    district_id: Mapped[int] = mapped_column(UInt64, primary_key=True, autoincrement=False)
    candidate_id: Mapped[int] = mapped_column(UInt64, nullable=False)

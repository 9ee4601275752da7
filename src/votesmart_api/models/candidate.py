"""Candidate model: individuals who can be recommended."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from votesmart_api.models.base import Base, OrderedEntryMixin
from votesmart_api.models.types import UInt64


class Candidate(Base, OrderedEntryMixin):
    """A candidate and the party they run for.

    ``party_id`` is not constrained; an unknown party resolves to
    ``"Unknown"`` at read time.
    """

    __tablename__ = "candidates"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    party_id: Mapped[int] = mapped_column(UInt64, nullable=False)

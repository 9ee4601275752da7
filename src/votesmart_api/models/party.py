"""Party model: political parties referenced by candidates."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from votesmart_api.models.base import Base, OrderedEntryMixin


class Party(Base, OrderedEntryMixin):
    """A political party. The stored value is just its title."""

    __tablename__ = "parties"

    title: Mapped[str] = mapped_column(String(500), nullable=False)

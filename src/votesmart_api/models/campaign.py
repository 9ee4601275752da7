"""Campaign model: the electoral context a recommendation applies to."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from votesmart_api.models.base import Base, OrderedEntryMixin


class Campaign(Base, OrderedEntryMixin):
    """An election campaign, e.g. a specific general election."""

    __tablename__ = "campaigns"

    title: Mapped[str] = mapped_column(String(500), nullable=False)

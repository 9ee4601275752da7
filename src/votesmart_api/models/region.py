"""Region model: top-level electoral geography."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from votesmart_api.models.base import Base, OrderedEntryMixin


class Region(Base, OrderedEntryMixin):
    """A region grouping one or more districts."""

    __tablename__ = "regions"

    title: Mapped[str] = mapped_column(String(500), nullable=False)

"""District model: electoral districts grouped by region."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from votesmart_api.models.base import Base, OrderedEntryMixin
from votesmart_api.models.types import UInt64


class District(Base, OrderedEntryMixin):
    """An electoral district.

    ``region_id`` is a plain reference with no foreign key constraint; a
    district may point at a region that has not been added.
    """

    __tablename__ = "districts"

    region_id: Mapped[int] = mapped_column(UInt64, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)

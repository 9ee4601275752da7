"""RegistryState model: single-row holder of the master account."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from votesmart_api.models.base import Base

REGISTRY_STATE_ID = 1


class RegistryState(Base):
    """Registry-wide configuration owned by the registry itself.

    Exactly one row (``id == REGISTRY_STATE_ID``) exists once the registry
    has been initialized.

    Attributes:
        master_account_id: The only account allowed to mutate the registry.
        initialized_at: When the registry was bootstrapped.
        updated_at: Last time the master account changed.
    """

    __tablename__ = "registry_state"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    master_account_id: Mapped[str] = mapped_column(String(64), nullable=False)
    initialized_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

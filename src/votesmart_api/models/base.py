"""Declarative base and shared column mixins."""

from sqlalchemy import Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from votesmart_api.models.types import UInt64


class Base(DeclarativeBase):
    """Declarative base for all registry ORM models."""


class OrderedEntryMixin:
    """Caller-chosen unsigned 64-bit key plus a dense insertion position.

    ``position`` is assigned once, when the key is first inserted, and never
    changes afterwards. Rows are never deleted, so positions in a table are
    always exactly ``0 .. count - 1``.
    """

    id: Mapped[int] = mapped_column(UInt64, primary_key=True, autoincrement=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, unique=True, index=True)

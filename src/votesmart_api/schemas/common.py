"""Common Pydantic v2 types and schemas shared across the API."""

from typing import Annotated

from pydantic import BaseModel, Field

from votesmart_api.models.types import UINT64_MAX

EntityId = Annotated[int, Field(ge=0, le=UINT64_MAX, description="Caller-chosen unsigned 64-bit identifier")]

Title = Annotated[str, Field(max_length=500)]

AccountId = Annotated[
    str,
    Field(
        min_length=2,
        max_length=64,
        pattern=r"^(([a-z\d]+[\-_])*[a-z\d]+\.)*([a-z\d]+[\-_])*[a-z\d]+$",
        description="Account identifier: lowercase alphanumeric parts separated by '-', '_' or '.'",
    ),
]


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error message")


class WindowParams(BaseModel):
    """Query parameters shared by every list endpoint.

    ``limit`` is an exclusive upper position bound over the table's insertion
    order, not a page size. Both default to covering the whole table.
    """

    from_index: int | None = Field(default=None, ge=0, description="First position to include (default 0)")
    limit: int | None = Field(default=None, ge=0, description="Exclusive upper position bound (default: table size)")

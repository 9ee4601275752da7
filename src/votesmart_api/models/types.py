"""Custom column types."""

from sqlalchemy import BigInteger
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator

UINT64_MAX = 2**64 - 1
_SIGN_BIT = 2**63


class UInt64(TypeDecorator[int]):
    """Unsigned 64-bit integer stored in a signed ``BIGINT`` column.

    Values at or above 2**63 are stored as their two's-complement signed
    counterpart, so every value in ``[0, 2**64)`` round-trips exactly and
    equality comparisons stay one-to-one. Ordering by the stored column does
    not match numeric order for large values.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value: int | None, dialect: Dialect) -> int | None:
        if value is None:
            return None
        if not 0 <= value <= UINT64_MAX:
            msg = f"Value {value} is outside the unsigned 64-bit range"
            raise ValueError(msg)
        return value - 2**64 if value >= _SIGN_BIT else value

    def process_result_value(self, value: int | None, dialect: Dialect) -> int | None:
        if value is None:
            return None
        return value + 2**64 if value < 0 else value

"""Helpers shared by the registry routers."""

from fastapi import HTTPException, status

from votesmart_api.core.config import Settings
from votesmart_api.schemas.common import ErrorResponse

WRITE_RESPONSES: dict[int | str, dict] = {
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
    403: {"model": ErrorResponse, "description": "Caller is not the master account"},
    413: {"model": ErrorResponse, "description": "Batch exceeds the configured maximum size"},
}


def check_batch_size(count: int, settings: Settings) -> None:
    """Reject bulk requests larger than ``settings.max_batch_size``.

    Raises:
        HTTPException: 413 when the batch is too large.
    """
    if count > settings.max_batch_size:
        raise HTTPException(
            status_code=413,
            detail=f"Batch of {count} entries exceeds the maximum of {settings.max_batch_size}",
        )


def forbidden() -> HTTPException:
    """Build the 403 raised when the access guard rejects a caller."""
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="No access")

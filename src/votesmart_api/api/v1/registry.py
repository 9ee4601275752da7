"""Registry bootstrap and master account endpoints.

POST /registry/init, GET /registry/master, PUT /registry/master.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from votesmart_api.api.v1.common import WRITE_RESPONSES, forbidden
from votesmart_api.core.dependencies import get_async_session, get_caller_account_id
from votesmart_api.schemas.common import ErrorResponse
from votesmart_api.schemas.registry import InitRegistryRequest, MasterAccountRequest, MasterAccountResponse
from votesmart_api.services.access_service import (
    RegistryAlreadyInitializedError,
    UnauthorizedError,
    get_master_account_id,
    initialize_registry,
    set_master_account_id,
)

registry_router = APIRouter(prefix="/registry", tags=["registry"])


@registry_router.post(
    "/init",
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse, "description": "Registry already initialized"}},
)
async def init_registry(
    body: InitRegistryRequest,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    caller_id: Annotated[str, Depends(get_caller_account_id)],
) -> MasterAccountResponse:
    """Initialize the registry.

    The master account is ``admin_id`` when given, otherwise the caller.
    Can only succeed once.
    """
    try:
        state = await initialize_registry(session, caller_id=caller_id, admin_id=body.admin_id)
    except RegistryAlreadyInitializedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return MasterAccountResponse(master_account_id=state.master_account_id)


@registry_router.get("/master")
async def get_master(
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> MasterAccountResponse:
    """Return the current master account (null before initialization)."""
    return MasterAccountResponse(master_account_id=await get_master_account_id(session))


@registry_router.put("/master", responses=WRITE_RESPONSES)
async def update_master(
    body: MasterAccountRequest,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    caller_id: Annotated[str, Depends(get_caller_account_id)],
) -> MasterAccountResponse:
    """Hand the master role to another account. Master only."""
    try:
        state = await set_master_account_id(session, caller_id=caller_id, admin_id=body.admin_id)
    except UnauthorizedError as e:
        raise forbidden() from e
    except Exception as e:
        logger.error(f"Unexpected error changing master account: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error changing master account.",
        ) from e
    return MasterAccountResponse(master_account_id=state.master_account_id)

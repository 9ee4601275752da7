"""Access guard and master account lifecycle.

The registry has exactly one writer, the master account. It is chosen when
the registry is initialized and can only be handed over by its current
holder. Reads never consult this module.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from votesmart_api.core.database import write_lock
from votesmart_api.models.registry_state import REGISTRY_STATE_ID, RegistryState


class UnauthorizedError(PermissionError):
    """Raised when a caller other than the master account attempts a mutation."""

    def __init__(self, caller_id: str) -> None:
        super().__init__("No access")
        self.caller_id = caller_id


class RegistryAlreadyInitializedError(ValueError):
    """Raised when initializing a registry that already has a master account."""


async def get_registry_state(session: AsyncSession) -> RegistryState | None:
    """Return the registry state row, or None before initialization."""
    return await session.get(RegistryState, REGISTRY_STATE_ID)


async def get_master_account_id(session: AsyncSession) -> str | None:
    """Return the current master account id, or None before initialization."""
    state = await get_registry_state(session)
    return None if state is None else state.master_account_id


async def initialize_registry(
    session: AsyncSession,
    *,
    caller_id: str,
    admin_id: str | None = None,
) -> RegistryState:
    """Bootstrap the registry and record its master account.

    Args:
        session: Database session.
        caller_id: Account performing the initialization.
        admin_id: Explicit master account. Defaults to ``caller_id``.

    Returns:
        The created RegistryState.

    Raises:
        RegistryAlreadyInitializedError: If the registry was already initialized.
    """
    master_account_id = admin_id if admin_id is not None else caller_id
    async with write_lock(session):
        if await get_registry_state(session) is not None:
            msg = "Registry has already been initialized"
            raise RegistryAlreadyInitializedError(msg)

        state = RegistryState(id=REGISTRY_STATE_ID, master_account_id=master_account_id)
        session.add(state)
        try:
            await session.commit()
        except IntegrityError:
            await session.rollback()
            msg = "Registry has already been initialized"
            raise RegistryAlreadyInitializedError(msg) from None
    await session.refresh(state)
    logger.info(f"Registry initialized by {caller_id} with master account {master_account_id}")
    return state


async def assert_caller_is_admin(session: AsyncSession, caller_id: str) -> RegistryState:
    """Reject callers that are not the current master account.

    Re-reads the registry state row with ``SELECT ... FOR UPDATE`` so a
    master handed over by another session is seen, and so PostgreSQL holds
    the row until the caller's transaction ends. An uninitialized registry
    has no master, so every caller is rejected.

    Returns:
        The locked RegistryState.

    Raises:
        UnauthorizedError: If ``caller_id`` is not the master account.
    """
    stmt = (
        select(RegistryState)
        .where(RegistryState.id == REGISTRY_STATE_ID)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    state = await session.scalar(stmt)
    if state is None or caller_id != state.master_account_id:
        logger.warning(f"Rejected registry mutation from {caller_id}")
        raise UnauthorizedError(caller_id)
    return state


@asynccontextmanager
async def admin_write(session: AsyncSession, caller_id: str) -> AsyncIterator[RegistryState]:
    """Run one mutation as the master account.

    Writes on the same engine run one at a time: the guard, every insert,
    and the caller's commit all happen while the write lock is held. If the
    body fails, the transaction is rolled back before the lock is released.

    Raises:
        UnauthorizedError: If ``caller_id`` is not the master account.
    """
    async with write_lock(session):
        try:
            yield await assert_caller_is_admin(session, caller_id)
        except Exception:
            await session.rollback()
            raise


async def set_master_account_id(
    session: AsyncSession,
    *,
    caller_id: str,
    admin_id: str,
) -> RegistryState:
    """Replace the master account. Only the current master may do this.

    No check is made that ``admin_id`` differs from the current master.

    Raises:
        UnauthorizedError: If ``caller_id`` is not the master account.
    """
    async with admin_write(session, caller_id) as state:
        state.master_account_id = admin_id
        await session.commit()
    await session.refresh(state)
    logger.info(f"Master account changed from {caller_id} to {admin_id}")
    return state
